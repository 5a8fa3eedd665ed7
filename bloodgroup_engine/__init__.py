"""
Blood Group Engine - 부모 혈액형으로 자녀 혈액형 확률 계산

ABO, Rh, Kell, MN, Duffy 체계의 자녀 표현형 분포와
신생아 용혈성 질환 위험, 수혈 적합성 정보를 제공하는 엔진
"""

from .models import (
    BloodGroupSystem,
    PhenotypeProbability,
    ProbabilityDistribution,
    RiskFinding,
    CompatibilityEntry
)

from .errors import (
    BloodGroupError,
    UnknownPhenotype,
    InvalidPhenotype,
    InternalConsistencyError
)

from .alleles import (
    alleles_for,
    normalize_phenotype,
    phenotype_options,
    split_abo_rh,
    ABO_RH_OPTIONS
)

from .genetics import (
    GeneticsEngine,
    combine,
    resolve_phenotype,
    compute_distribution,
    compute_offspring_report
)

from .risks import (
    RiskEvaluator,
    evaluate_risks
)

from .compatibility import (
    can_donate,
    compatible_donors,
    compatible_recipients,
    compatibility_report,
    relative_donation_advisory
)

from .punnett import (
    PunnettSquare,
    build_punnett
)

from .visualizer import (
    DistributionVisualizer
)

from .report import (
    build_report
)

from .config import (
    EngineConfig,
    VisualizationConfig,
    ApiConfig
)

from .i18n import (
    SUPPORTED_LANGUAGES,
    translate
)


__version__ = "1.0.0"
__all__ = [
    # Models
    "BloodGroupSystem",
    "PhenotypeProbability",
    "ProbabilityDistribution",
    "RiskFinding",
    "CompatibilityEntry",

    # Errors
    "BloodGroupError",
    "UnknownPhenotype",
    "InvalidPhenotype",
    "InternalConsistencyError",

    # Alleles
    "alleles_for",
    "normalize_phenotype",
    "phenotype_options",
    "split_abo_rh",
    "ABO_RH_OPTIONS",

    # Genetics
    "GeneticsEngine",
    "combine",
    "resolve_phenotype",
    "compute_distribution",
    "compute_offspring_report",

    # Risks
    "RiskEvaluator",
    "evaluate_risks",

    # Compatibility
    "can_donate",
    "compatible_donors",
    "compatible_recipients",
    "compatibility_report",
    "relative_donation_advisory",

    # Punnett
    "PunnettSquare",
    "build_punnett",

    # Visualizer / Report
    "DistributionVisualizer",
    "build_report",

    # Config
    "EngineConfig",
    "VisualizationConfig",
    "ApiConfig",

    # i18n
    "SUPPORTED_LANGUAGES",
    "translate",
]
