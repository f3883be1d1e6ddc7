"""Chain AI Agent - natural-language commands for EVM blockchains.

An LLM picks one of a fixed catalog of blockchain operations (wallet
derivation, balance lookups, transfers, explorer queries) via function
calling; the dispatcher runs it against a JSON-RPC node and the Cronos
explorer API and returns a uniform result envelope.
"""

__version__ = "0.1.0"
