"""Adapters: concrete implementations of bldt's boundary contracts.

File locking, the on-disk record codec, format adapters for the remote
table formats and progress sinks.
"""
