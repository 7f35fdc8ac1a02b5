"""
Test suite for bldt.

Layout:
- unit/        : Fast, isolated tests of domain types, adapters, registry and CLI helpers.
- contract/    : Behavior every implementation of an interface must satisfy.
- integration/ : The table database against a real directory and a mocked HTTP origin.
- e2e/         : The bldt command line, driven through click's test runner.
- fixtures/    : Shared pytest fixtures (tables, fake remote).
- helpers/     : Reusable helpers and sample payloads.

Notes:
- Tests are marked by their top-level directory (see tests/conftest.py).
- Property tests carry @pytest.mark.property in addition to their directory mark.
"""
