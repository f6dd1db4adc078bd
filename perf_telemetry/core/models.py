"""
Data model for the telemetry engine.

Samples, bottlenecks, analyses, recommendations and reports are plain
dataclasses. Enumerations are string valued so members compare equal to
their names as producers spell them ("fps", "rendering", ...).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional


class MetricUnit(str, Enum):
    """Unit of a metric sample."""
    MS = "ms"
    BYTES = "bytes"
    FPS = "fps"
    COUNT = "count"
    PERCENTAGE = "percentage"


class MetricCategory(str, Enum):
    """Coarse grouping of metric samples; each has its own buffer."""
    RENDERING = "rendering"
    NETWORK = "network"
    MEMORY = "memory"
    USER_INTERACTION = "user_interaction"
    BUNDLE = "bundle"
    CUSTOM = "custom"


class BottleneckType(str, Enum):
    COMPONENT = "component"
    NETWORK = "network"
    MEMORY = "memory"
    COMPUTATION = "computation"
    IO = "io"


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class Priority(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Sort rank, lower sorts first."""
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    Priority.CRITICAL: 0,
    Priority.HIGH: 1,
    Priority.MEDIUM: 2,
    Priority.LOW: 3,
}


class Complexity(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class TrendDirection(str, Enum):
    IMPROVING = "improving"
    STABLE = "stable"
    DEGRADING = "degrading"


class AppEnvironment(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


@dataclass(frozen=True)
class Metric:
    """Individual performance sample. Immutable once ingested."""
    id: str
    name: str
    value: float
    unit: MetricUnit
    category: MetricCategory
    timestamp: float
    metadata: Dict[str, Any] = field(default_factory=dict)
    tags: FrozenSet[str] = field(default_factory=frozenset)


@dataclass
class Bottleneck:
    """A detected performance problem."""
    id: str
    type: BottleneckType
    severity: Severity
    description: str
    impact: float  # 0-100
    affected_metrics: List[str]
    detected_at: float
    suggested_fix: str
    estimated_improvement: float  # 0-100


@dataclass
class TrendResult:
    """Trajectory of a single named metric."""
    metric: str
    trend: TrendDirection
    change: float
    confidence: float


@dataclass
class Analysis:
    """A scored snapshot of the store."""
    overall_score: int
    category_scores: Dict[str, float]
    trends: List[TrendResult]
    recommendations: List[str]
    critical_issues: List[str]
    summary: str
    generated_at: Optional[float] = None
    sample_count: int = 0


@dataclass
class Recommendation:
    """Actionable optimization suggestion."""
    priority: Priority
    category: str
    title: str
    description: str
    estimated_impact: float  # 0-100
    implementation_complexity: Complexity
    steps: List[str] = field(default_factory=list)
    related_metrics: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ScreenSize:
    width: int
    height: int


@dataclass
class DeviceInfo:
    """Device descriptor supplied by the host."""
    os: str
    os_version: str
    screen_size: ScreenSize
    model: Optional[str] = None
    memory: Optional[int] = None
    connection_type: Optional[str] = None


@dataclass
class AppInfo:
    """Application descriptor supplied by the host."""
    version: str
    environment: AppEnvironment
    build_number: Optional[str] = None


@dataclass(frozen=True)
class TimeRange:
    start: float
    end: float

    def contains(self, timestamp: float) -> bool:
        """True when timestamp lies in the half-open range (start, end]."""
        return self.start < timestamp <= self.end


@dataclass
class Report:
    """Point-in-time bundle of analysis, bottlenecks and raw samples."""
    id: str
    generated_at: float
    time_range: TimeRange
    analysis: Analysis
    bottlenecks: List[Bottleneck]
    metrics: List[Metric]
    device_info: DeviceInfo
    app_info: AppInfo
