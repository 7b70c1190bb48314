from __future__ import annotations


class EcoTraceError(Exception):
    # Base class for errors raised by the core (caller bugs, not user input).
    pass


class StepOutOfRangeError(EcoTraceError, IndexError):
    # Raised when a step index outside the catalog is requested.
    pass


class UnknownQuestionError(EcoTraceError, LookupError):
    # Raised when a question id is not part of the catalog.
    pass


class InvalidAnswerError(EcoTraceError, ValueError):
    # Raised when a value is outside a question's allowed domain.
    pass


class WizardTransitionError(EcoTraceError, RuntimeError):
    # Raised when a wizard operation is invoked from a state that does not allow it.
    pass
