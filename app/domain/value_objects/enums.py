"""Domain enums — pure Python, no external dependencies."""

from enum import Enum


class AssignmentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


class SchemaKind(str, Enum):
    """Upload destination. Selects the field schema and the distribution policy."""

    GENERIC_LIST = "generic_list"
    CALL_QUEUE = "call_queue"


class DistributionPolicy(str, Enum):
    BALANCED_PARTITION = "balanced_partition"
    ROUND_ROBIN = "round_robin"


class UploadFormat(str, Enum):
    CSV = "csv"
    XLSX = "xlsx"


POLICY_BY_KIND: dict[SchemaKind, DistributionPolicy] = {
    SchemaKind.GENERIC_LIST: DistributionPolicy.BALANCED_PARTITION,
    SchemaKind.CALL_QUEUE: DistributionPolicy.ROUND_ROBIN,
}
