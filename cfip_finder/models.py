"""Value objects passed between the collection, probing and ranking stages."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Candidate:
    """An IPv4 address considered for latency testing."""

    address: str
    delay_ms: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"ip": self.address, "delay": self.delay_ms}


@dataclass(frozen=True)
class SourceOutcome:
    """Telemetry for a single source fetch."""

    source: str
    raw_count: int = 0
    valid_count: int = 0
    success: bool = True
    error_message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        entry: Dict[str, Any] = {"source": self.source, "success": self.success}
        if self.success:
            entry["count"] = self.raw_count
            entry["valid"] = self.valid_count
        else:
            entry["error"] = self.error_message
        return entry


@dataclass(frozen=True)
class CollectionResult:
    """Deduplicated candidates gathered from every configured source.

    Candidates are kept in first-seen order so that ranking runs are
    reproducible for the same source contents.
    """

    candidates: Tuple[Candidate, ...]
    sources: Tuple[SourceOutcome, ...]
    timestamp: str
    count: int = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "count", len(self.candidates))

    @property
    def addresses(self) -> Tuple[str, ...]:
        return tuple(c.address for c in self.candidates)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ips": [c.to_dict() for c in self.candidates],
            "count": self.count,
            "sources": [s.to_dict() for s in self.sources],
            "timestamp": self.timestamp,
        }


class ProbeErrorKind(str, Enum):
    """Why a probe failed."""

    TIMEOUT = "timeout"
    NETWORK_ERROR = "network_error"


@dataclass(frozen=True)
class ProbeOutcome:
    """Result of one probe attempt against one address.

    ``delay_ms`` is set exactly when the probe succeeded, and ``error_kind``
    exactly when it did not.
    """

    address: str
    success: bool
    delay_ms: Optional[float] = None
    error_kind: Optional[ProbeErrorKind] = None
    error_message: Optional[str] = None

    def __post_init__(self):
        if self.success and (self.delay_ms is None or self.error_kind is not None):
            raise ValueError(f"Successful probe of {self.address} needs a delay and no error kind")
        if not self.success and (self.delay_ms is not None or self.error_kind is None):
            raise ValueError(f"Failed probe of {self.address} needs an error kind and no delay")

    @classmethod
    def succeeded(cls, address: str, delay_ms: float) -> "ProbeOutcome":
        return cls(address=address, success=True, delay_ms=delay_ms)

    @classmethod
    def failed(cls, address: str, error_kind: ProbeErrorKind,
               error_message: Optional[str] = None) -> "ProbeOutcome":
        return cls(address=address, success=False, error_kind=error_kind,
                   error_message=error_message)

    def to_dict(self) -> Dict[str, Any]:
        entry: Dict[str, Any] = {
            "ip": self.address,
            "delay": self.delay_ms,
            "success": self.success,
        }
        if not self.success:
            entry["error_kind"] = self.error_kind.value
            entry["error"] = self.error_message
        return entry


@dataclass(frozen=True)
class BatchResult:
    """Ranked outcome of probing a batch of candidates.

    ``top`` holds the fastest successful outcomes in ascending delay order,
    ``all`` holds one outcome per input candidate in input order.
    """

    top: Tuple[ProbeOutcome, ...]
    all: Tuple[ProbeOutcome, ...]
    tested_at: str

    @property
    def success_count(self) -> int:
        return sum(1 for o in self.all if o.success)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fastIPs": [o.to_dict() for o in self.top],
            "allResults": [o.to_dict() for o in self.all],
            "testedAt": self.tested_at,
        }
