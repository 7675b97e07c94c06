"""Request validators for the host binding."""
from slotspin.config import settings
from slotspin.errors import ErrorCode, GameError
from slotspin.logic.payout import effective_bet
from slotspin.protocol import SpinRequest


def validate_funds(request: SpinRequest) -> None:
    """
    Reject spins the player cannot cover.

    Raises INSUFFICIENT_FUNDS if enforcement is on and the effective bet
    exceeds the supplied balance.
    """
    if not settings.enforce_sufficient_funds:
        return
    bet = effective_bet(request.bet)
    if request.balance < bet:
        raise GameError(
            ErrorCode.INSUFFICIENT_FUNDS,
            f"Balance {request.balance} does not cover bet {bet}.",
        )


def validate_spin_request(request: SpinRequest) -> None:
    """Run all validations on spin request."""
    validate_funds(request)
