"""Blockchain layer for Chain AI Agent.

Chain definitions, HD wallet derivation from a mnemonic, an async Web3
connection cache, and the operation set that backs each catalog function.
"""
