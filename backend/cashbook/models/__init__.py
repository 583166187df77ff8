from .accounts import Account, Role
from .ledger import Transaction, TransactionKind

__all__ = [
    'Account', 'Role',
    'Transaction', 'TransactionKind',
]
