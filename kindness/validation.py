"""
validation.py - Transfer Validation Rules

Pure checks over a read-only LedgerView. Each rule returns None when the
request passes or the ValidationErrorKind describing the failure. Rules are
evaluated in a fixed order and the first failure wins, so callers always see
the same reason for the same request.
"""

from __future__ import annotations
from typing import Any, Callable, List, Optional, Tuple

from .core import (
    LedgerView, ValidationErrorKind,
    MIN_TRANSFER_AMOUNT, MAX_TRANSFER_AMOUNT,
    NOTE_MIN_LENGTH, NOTE_MAX_LENGTH,
)


# Type alias for a single rule: (view, sender, recipient, amount, note) -> kind or None
TransferCheck = Callable[[LedgerView, str, str, Any, Any], Optional[ValidationErrorKind]]


def normalize_note(note: Any) -> str:
    """Return the trimmed note, or an empty string if note is not text."""
    if not isinstance(note, str):
        return ""
    return note.strip()


def is_valid_amount(amount: Any) -> bool:
    """True if amount is a whole int within the transfer bounds (bool excluded)."""
    if isinstance(amount, bool) or not isinstance(amount, int):
        return False
    return MIN_TRANSFER_AMOUNT <= amount <= MAX_TRANSFER_AMOUNT


# ============================================================================
# RULES
# ============================================================================

def check_sender(view: LedgerView, sender: str, recipient: str, amount: Any, note: Any) -> Optional[ValidationErrorKind]:
    if not view.is_registered(sender):
        return ValidationErrorKind.SENDER_UNVERIFIED
    return None


def check_recipient(view: LedgerView, sender: str, recipient: str, amount: Any, note: Any) -> Optional[ValidationErrorKind]:
    if not view.is_registered(recipient):
        return ValidationErrorKind.RECIPIENT_UNVERIFIED
    return None


def check_not_self(view: LedgerView, sender: str, recipient: str, amount: Any, note: Any) -> Optional[ValidationErrorKind]:
    if sender == recipient:
        return ValidationErrorKind.SELF_TRANSFER_NOT_ALLOWED
    return None


def check_amount(view: LedgerView, sender: str, recipient: str, amount: Any, note: Any) -> Optional[ValidationErrorKind]:
    if not is_valid_amount(amount):
        return ValidationErrorKind.AMOUNT_OUT_OF_RANGE
    return None


def check_balance(view: LedgerView, sender: str, recipient: str, amount: Any, note: Any) -> Optional[ValidationErrorKind]:
    # Only reached once amount is known to be a valid int
    if view.get_balance(sender) < amount:
        return ValidationErrorKind.INSUFFICIENT_BALANCE
    return None


def check_note(view: LedgerView, sender: str, recipient: str, amount: Any, note: Any) -> Optional[ValidationErrorKind]:
    if len(normalize_note(note)) < NOTE_MIN_LENGTH:
        return ValidationErrorKind.NOTE_REQUIRED
    return None


def check_note_length(view: LedgerView, sender: str, recipient: str, amount: Any, note: Any) -> Optional[ValidationErrorKind]:
    if len(normalize_note(note)) > NOTE_MAX_LENGTH:
        return ValidationErrorKind.NOTE_TOO_LONG
    return None


# Evaluation order matters: first failing check wins.
TRANSFER_CHECKS: Tuple[TransferCheck, ...] = (
    check_sender,
    check_recipient,
    check_not_self,
    check_amount,
    check_balance,
    check_note,
    check_note_length,
)


def validate_transfer(
    view: LedgerView,
    sender: str,
    recipient: str,
    amount: Any,
    note: Any,
) -> Optional[ValidationErrorKind]:
    """
    Validate a transfer request against the current ledger state.

    Args:
        view: Read-only ledger access
        sender: Key of the participant giving tokens
        recipient: Key of the participant receiving tokens
        amount: Requested token count
        note: Explanatory note (trimmed before length checks)

    Returns:
        None if the transfer may proceed, otherwise the first failing kind.
    """
    for check in TRANSFER_CHECKS:
        kind = check(view, sender, recipient, amount, note)
        if kind is not None:
            return kind
    return None


def collect_failures(
    view: LedgerView,
    sender: str,
    recipient: str,
    amount: Any,
    note: Any,
) -> List[ValidationErrorKind]:
    """
    Run every rule and return all failures in evaluation order.

    Useful for boundary layers that want to report every problem at once.
    The balance rule is skipped when the amount itself is invalid.
    """
    failures = []
    amount_ok = is_valid_amount(amount)
    for check in TRANSFER_CHECKS:
        if check is check_balance and not (amount_ok and view.is_registered(sender)):
            continue
        kind = check(view, sender, recipient, amount, note)
        if kind is not None:
            failures.append(kind)
    return failures
