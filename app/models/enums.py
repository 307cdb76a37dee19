from enum import Enum

class VolunteeredChoice(str, Enum):
    Yes = "نعم"
    No = "لا"

class StatusType(str, Enum):
    Info = "info"
    Error = "error"
    Success = "success"

class PipelineState(str, Enum):
    Idle = "Idle"
    Validating = "Validating"
    VerifyingHuman = "VerifyingHuman"
    Submitting = "Submitting"
    Redirecting = "Redirecting"
    Failed = "Failed"
