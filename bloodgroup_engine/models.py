"""
models.py - 핵심 데이터 모델 정의
혈액형 체계, 대립유전자, 확률 분포, 위험 소견 클래스
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Tuple


class BloodGroupSystem(Enum):
    """혈액형 체계 정의"""
    ABO = "ABO"
    RH = "Rh"
    ABO_RH = "ABO/Rh"   # ABO와 Rh를 한 라벨로 합친 기본 패널
    KELL = "Kell"
    MN = "MN"
    DUFFY = "Duffy"

    @property
    def is_composite(self) -> bool:
        return self is BloodGroupSystem.ABO_RH

    @classmethod
    def from_name(cls, name: str) -> 'BloodGroupSystem':
        """'abo_rh', 'Kell', 'ABO/Rh' 등 이름으로 조회"""
        key = str(name).strip()
        for system in cls:
            if key.upper() == system.name or key.lower() == system.value.lower():
                return system
        raise ValueError(f"알 수 없는 혈액형 체계: {name!r}")


# ============================================================
# 체계별 대립유전자 (닫힌 열거형)
# ============================================================

class ABOAllele(Enum):
    A = "A"
    B = "B"
    O = "O"


class RhAllele(Enum):
    POSITIVE = "+"
    NEGATIVE = "−"


class KellAllele(Enum):
    K = "K"        # 우성 (Kell 항원)
    k = "k"        # 열성


class MNAllele(Enum):
    M = "M"
    N = "N"


class DuffyAllele(Enum):
    """Duffy 체계 내부 기호 (ABO의 A/B/O와 무관)"""
    A = "A"        # Fy^a
    B = "B"        # Fy^b
    O = "O"        # 무발현 (Fy null)


AlleleSet = Tuple[Enum, ...]
GenotypePair = Tuple[Enum, Enum]


@dataclass(frozen=True)
class PhenotypeProbability:
    """분포의 한 항목: 표현형, 조합 수, 확률"""
    phenotype: str
    count: int
    probability: float

    @property
    def percent(self) -> float:
        return self.probability * 100.0


@dataclass(frozen=True)
class ProbabilityDistribution:
    """
    자녀 표현형 확률 분포 (불변)
    - system: 혈액형 체계
    - entries: 표현형 목록 순서대로 정렬된 항목 (조합 수 0인 표현형은 제외)
    - total: 전체 조합 수
    """
    system: BloodGroupSystem
    entries: Tuple[PhenotypeProbability, ...]
    total: int

    def __iter__(self) -> Iterator[PhenotypeProbability]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, phenotype) -> bool:
        return any(e.phenotype == phenotype for e in self.entries)

    @property
    def phenotypes(self) -> List[str]:
        return [e.phenotype for e in self.entries]

    def probability(self, phenotype: str) -> float:
        """표현형의 확률 (분포에 없으면 0.0)"""
        for e in self.entries:
            if e.phenotype == phenotype:
                return e.probability
        return 0.0

    def as_mapping(self) -> Dict[str, float]:
        return {e.phenotype: e.probability for e in self.entries}

    def to_dict(self) -> Dict:
        return {
            'system': self.system.value,
            'total_combinations': self.total,
            'probabilities': [
                {
                    'phenotype': e.phenotype,
                    'count': e.count,
                    'probability': e.probability
                }
                for e in self.entries
            ]
        }


@dataclass(frozen=True)
class RiskFinding:
    """위험 규칙이 발동했을 때 생성되는 소견"""
    key: str
    title: str
    description: str

    def to_dict(self) -> Dict[str, str]:
        return {'key': self.key, 'title': self.title, 'description': self.description}

    def __str__(self):
        return f"{self.title}: {self.description}"


@dataclass(frozen=True)
class CompatibilityEntry:
    """자녀 표현형 하나에 대한 수혈 적합성"""
    phenotype: str
    can_receive_from: List[str] = field(default_factory=list)
    can_donate_to: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            'phenotype': self.phenotype,
            'can_receive_from': list(self.can_receive_from),
            'can_donate_to': list(self.can_donate_to)
        }
