# src/breadboard_core/simulation/feedback.py
import logging
from typing import Protocol, runtime_checkable

from ..components.capabilities import ICircuitComponent

logger = logging.getLogger(__name__)


@runtime_checkable
class FeedbackListener(Protocol):
    """
    Receives the lab's circuit-level events. Implementations play sounds, flash
    lights or, in tests, record what happened.

    `circuit_completed` fires when a battery's circuit becomes solvable after not
    being so; `short_circuit` fires when it becomes a dead short and on every pass
    in which its circuit cannot be solved.
    """
    def circuit_completed(self, battery: ICircuitComponent) -> None:
        ...

    def short_circuit(self, battery: ICircuitComponent) -> None:
        ...


class LoggingFeedback:
    """The default listener: writes each event to the log."""

    def circuit_completed(self, battery: ICircuitComponent) -> None:
        logger.info(f"Circuit completed through battery '{battery.name}'.")

    def short_circuit(self, battery: ICircuitComponent) -> None:
        logger.warning(f"Short circuit across battery '{battery.name}'.")
