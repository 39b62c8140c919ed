import enum


class BillStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REFUSED = "refused"


class SubmissionState(str, enum.Enum):
    AWAITING_FILE = "awaiting_file"
    FILE_STAGED = "file_staged"
    SUBMITTED = "submitted"
