"""HD wallet derivation using eth-account."""

from __future__ import annotations

from dataclasses import dataclass

from eth_account import Account
from eth_account.signers.local import LocalAccount

Account.enable_unaudited_hdwallet_features()

DERIVATION_PATH = "m/44'/60'/0'/0/{index}"


@dataclass
class WalletContext:
    """Wallet-index counters shared by every operation of one dispatcher.

    ``wallet_max_account`` is the highest derived index that ``listWallets``
    reports; ``createWallet`` bumps it first and derives at the new index,
    so wallet 0 is never handed out twice.
    Not thread-safe.
    """

    wallet_max_account: int = 0
    current_wallet_index: int = 0


def derivation_path(index: int) -> str:
    return DERIVATION_PATH.format(index=index)


def derive_account(mnemonic: str, index: int) -> LocalAccount:
    """Derive the account at ``m/44'/60'/0'/0/<index>`` from *mnemonic*.

    Raises
    ------
    ValueError
        If *mnemonic* is empty.
    """
    if not mnemonic or not mnemonic.strip():
        raise ValueError("No mnemonic provided.")
    return Account.from_mnemonic(mnemonic.strip(), account_path=derivation_path(index))
