"""Domain enumerations for the back-office service.

Enums represent fixed sets of document statuses and categories. Values are
the strings stored in Firestore, so they must not be renamed.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class QuotationStatus(_ValuesMixin, str, Enum):
    """Quotation lifecycle status."""

    DRAFT = "draft"
    SENT = "sent"
    VIEWED = "viewed"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    EXPIRED = "expired"


class CostEstimateStatus(_ValuesMixin, str, Enum):
    """Cost estimate lifecycle status."""

    DRAFT = "draft"
    SENT = "sent"
    VIEWED = "viewed"
    APPROVED = "approved"
    REJECTED = "rejected"


class CostCategory(_ValuesMixin, str, Enum):
    """Category of a cost estimate line item."""

    MEDIA_COST = "media_cost"
    PRODUCTION_COST = "production_cost"
    INSTALLATION_COST = "installation_cost"
    MAINTENANCE_COST = "maintenance_cost"
    OTHER = "other"


class JobOrderStatus(_ValuesMixin, str, Enum):
    """Job order status."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ServiceAssignmentStatus(_ValuesMixin, str, Enum):
    """Service assignment status (capitalized, as stored by the logistics UI)."""

    PENDING = "Pending"
    ONGOING = "Ongoing"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class ReportStatus(_ValuesMixin, str, Enum):
    """Logistics report status."""

    DRAFT = "draft"
    POSTED = "posted"


class CollectibleStatus(_ValuesMixin, str, Enum):
    """Collectible (accounts receivable) status."""

    PENDING = "pending"
    COLLECTED = "collected"
    OVERDUE = "overdue"


class BookingStatus(_ValuesMixin, str, Enum):
    """Booking status (upper-case, as stored by the sales UI)."""

    RESERVED = "RESERVED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class ClientStatus(_ValuesMixin, str, Enum):
    """Client record status."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    LEAD = "lead"


class FinanceRequestType(_ValuesMixin, str, Enum):
    """Finance request type."""

    REIMBURSEMENT = "reimbursement"
    REQUISITION = "requisition"


class PettyCashCycleStatus(_ValuesMixin, str, Enum):
    """Petty cash cycle status."""

    ACTIVE = "active"
    COMPLETED = "completed"


class EmailDocumentKind(_ValuesMixin, str, Enum):
    """Document kind an outbound email is about (stored as email_type)."""

    QUOTATION = "quotation"
    COST_ESTIMATE = "CE"
    REPORT = "report"
    GENERAL = "general"
