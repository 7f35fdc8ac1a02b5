"""Entrypoints (inbound adapters) for bldt.

Expose the table database to the outside world through the command-line
interface. Parse and validate inputs, call the service layer, and present
results.

Dependency rule: may import `bldt.service_layer`; avoid importing
`bldt.adapters` beyond presentation helpers such as progress sinks.
"""
