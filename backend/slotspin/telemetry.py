"""Server-side telemetry."""
import logging
from dataclasses import dataclass
from typing import Any, Protocol


logger = logging.getLogger(__name__)


class TelemetrySink(Protocol):
    """Protocol for telemetry sinks."""

    def emit(self, event_name: str, data: dict[str, Any]) -> None:
        """Emit a telemetry event."""
        ...


class LoggingTelemetrySink:
    """Default sink that logs telemetry events."""

    def emit(self, event_name: str, data: dict[str, Any]) -> None:
        """Log telemetry event."""
        logger.info("TELEMETRY %s: %s", event_name, data)


@dataclass
class SpinProcessedEvent:
    """spin_processed telemetry event."""

    round_id: str
    engine: str  # "reel" | "grid"
    bet: int  # effective bet
    delta: int
    balance: int
    outcome: str
    lines_won: int | None  # grid only
    config_hash: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for emission."""
        return {
            "round_id": self.round_id,
            "engine": self.engine,
            "bet": self.bet,
            "delta": self.delta,
            "balance": self.balance,
            "outcome": self.outcome,
            "lines_won": self.lines_won,
            "config_hash": self.config_hash,
        }


@dataclass
class SpinRejectedEvent:
    """spin_rejected telemetry event."""

    engine: str
    reason: str  # "INSUFFICIENT_FUNDS" | ...
    balance: int
    bet: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for emission."""
        return {
            "engine": self.engine,
            "reason": self.reason,
            "balance": self.balance,
            "bet": self.bet,
        }


@dataclass
class CreditAppliedEvent:
    """credit_applied telemetry event."""

    amount: int
    balance: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for emission."""
        return {"amount": self.amount, "balance": self.balance}


class TelemetryService:
    """Service for emitting server telemetry events."""

    def __init__(self, sink: TelemetrySink | None = None):
        self._sink = sink or LoggingTelemetrySink()
        self._sink_errors = 0  # Counter for sink failures

    def set_sink(self, sink: TelemetrySink) -> None:
        """Set the telemetry sink (useful for testing)."""
        self._sink = sink

    @property
    def sink_errors(self) -> int:
        return self._sink_errors

    def _safe_emit(self, event_name: str, data: dict[str, Any]) -> None:
        """
        Emit event with exception safety.

        Sink failures MUST NOT break HTTP requests.
        """
        try:
            self._sink.emit(event_name, data)
        except Exception as e:
            self._sink_errors += 1
            logger.warning(
                "Telemetry sink error (count=%d): %s - %s",
                self._sink_errors,
                event_name,
                str(e),
            )

    def emit_spin_processed(self, event: SpinProcessedEvent) -> None:
        self._safe_emit("spin_processed", event.to_dict())

    def emit_spin_rejected(self, event: SpinRejectedEvent) -> None:
        self._safe_emit("spin_rejected", event.to_dict())

    def emit_credit_applied(self, event: CreditAppliedEvent) -> None:
        self._safe_emit("credit_applied", event.to_dict())


# Global instance
telemetry_service = TelemetryService()
