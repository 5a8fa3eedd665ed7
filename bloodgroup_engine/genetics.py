"""
genetics.py - 멘델 유전 법칙 구현
대립유전자 교배(조합), 유전자형 → 표현형 결정, 확률 분포 집계
"""

import logging
from collections import Counter
from dataclasses import dataclass
from functools import lru_cache
from itertools import product
from typing import Dict, FrozenSet, List, Mapping, Optional, Sequence, Tuple, Type
from enum import Enum

from .alleles import (
    ALLELE_TABLES, MINUS, PHENOTYPE_OPTIONS,
    normalize_phenotype, split_abo_rh
)
from .config import EngineConfig
from .errors import InternalConsistencyError
from .models import (
    BloodGroupSystem, AlleleSet, GenotypePair,
    PhenotypeProbability, ProbabilityDistribution,
    ABOAllele, RhAllele, KellAllele, MNAllele, DuffyAllele
)

logger = logging.getLogger(__name__)


# ============================================================
# 표현형 결정 표
# 대립유전자 쌍(순서 무관) → 표현형. 알파벳의 모든 쌍을 포함해야 한다.
# ============================================================

def _pair(*alleles) -> FrozenSet[Enum]:
    return frozenset(alleles)


# 공동우성 A, B / 열성 O
ABO_PHENOTYPES: Dict[FrozenSet[Enum], str] = {
    _pair(ABOAllele.A): 'A',
    _pair(ABOAllele.A, ABOAllele.O): 'A',
    _pair(ABOAllele.B): 'B',
    _pair(ABOAllele.B, ABOAllele.O): 'B',
    _pair(ABOAllele.A, ABOAllele.B): 'AB',
    _pair(ABOAllele.O): 'O',
}

# + 우성
RH_PHENOTYPES: Dict[FrozenSet[Enum], str] = {
    _pair(RhAllele.POSITIVE): '+',
    _pair(RhAllele.POSITIVE, RhAllele.NEGATIVE): '+',
    _pair(RhAllele.NEGATIVE): MINUS,
}

# K 우성
KELL_PHENOTYPES: Dict[FrozenSet[Enum], str] = {
    _pair(KellAllele.K): 'K+',
    _pair(KellAllele.K, KellAllele.k): 'K+',
    _pair(KellAllele.k): f'K{MINUS}',
}

# 공동우성
MN_PHENOTYPES: Dict[FrozenSet[Enum], str] = {
    _pair(MNAllele.M): 'M',
    _pair(MNAllele.N): 'N',
    _pair(MNAllele.M, MNAllele.N): 'MN',
}

# Fy^a, Fy^b 공동우성 / 무발현 O
DUFFY_PHENOTYPES: Dict[FrozenSet[Enum], str] = {
    _pair(DuffyAllele.A): f'Fy(a+b{MINUS})',
    _pair(DuffyAllele.A, DuffyAllele.O): f'Fy(a+b{MINUS})',
    _pair(DuffyAllele.B): f'Fy(a{MINUS}b+)',
    _pair(DuffyAllele.B, DuffyAllele.O): f'Fy(a{MINUS}b+)',
    _pair(DuffyAllele.A, DuffyAllele.B): 'Fy(a+b+)',
    _pair(DuffyAllele.O): f'Fy(a{MINUS}b{MINUS})',
}


@dataclass(frozen=True)
class Locus:
    """
    단일 유전자 좌위
    - system: 혈액형 체계
    - allele_type: 대립유전자 열거형
    - phenotypes: 대립유전자 쌍 → 표현형 표
    """
    system: BloodGroupSystem
    allele_type: Type[Enum]
    phenotypes: Dict[FrozenSet[Enum], str]

    def alleles_for(self, phenotype: str) -> AlleleSet:
        return ALLELE_TABLES[self.system][phenotype]

    def resolve(self, first: Enum, second: Enum) -> str:
        """대립유전자 쌍 → 표현형"""
        if not (isinstance(first, self.allele_type) and isinstance(second, self.allele_type)):
            raise InternalConsistencyError(self.system, (first, second))

        phenotype = self.phenotypes.get(_pair(first, second))
        if phenotype is None:
            raise InternalConsistencyError(self.system, (first, second))
        return phenotype


ABO_LOCUS = Locus(BloodGroupSystem.ABO, ABOAllele, ABO_PHENOTYPES)
RH_LOCUS = Locus(BloodGroupSystem.RH, RhAllele, RH_PHENOTYPES)
KELL_LOCUS = Locus(BloodGroupSystem.KELL, KellAllele, KELL_PHENOTYPES)
MN_LOCUS = Locus(BloodGroupSystem.MN, MNAllele, MN_PHENOTYPES)
DUFFY_LOCUS = Locus(BloodGroupSystem.DUFFY, DuffyAllele, DUFFY_PHENOTYPES)

LOCI: Dict[BloodGroupSystem, Locus] = {
    locus.system: locus
    for locus in (ABO_LOCUS, RH_LOCUS, KELL_LOCUS, MN_LOCUS, DUFFY_LOCUS)
}

# 패널 = 독립적으로 결정한 뒤 라벨을 이어 붙이는 좌위 목록
PANELS: Dict[BloodGroupSystem, Tuple[Locus, ...]] = {
    BloodGroupSystem.ABO: (ABO_LOCUS,),
    BloodGroupSystem.RH: (RH_LOCUS,),
    BloodGroupSystem.ABO_RH: (ABO_LOCUS, RH_LOCUS),
    BloodGroupSystem.KELL: (KELL_LOCUS,),
    BloodGroupSystem.MN: (MN_LOCUS,),
    BloodGroupSystem.DUFFY: (DUFFY_LOCUS,),
}


def combine(set_a: Sequence, set_b: Sequence) -> List[GenotypePair]:
    """
    두 부모의 대립유전자 목록으로 가능한 모든 자녀 유전자형 (카테시안 곱)
    각 쌍의 가중치는 동일하다.
    """
    return [(a, b) for a in set_a for b in set_b]


def resolve_phenotype(system: BloodGroupSystem, first: Enum, second: Enum) -> str:
    """단일 체계의 대립유전자 쌍 → 표현형"""
    if system.is_composite:
        raise ValueError(f"{system.value} 패널은 좌위별로 결정해야 함")
    return LOCI[system].resolve(first, second)


def split_phenotype(system: BloodGroupSystem, phenotype: str) -> Tuple[str, ...]:
    """패널 라벨을 좌위별 라벨로 분리"""
    if system is BloodGroupSystem.ABO_RH:
        return split_abo_rh(phenotype)
    return (normalize_phenotype(system, phenotype),)


class GeneticsEngine:
    """혈액형 유전 확률 엔진"""

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        # 결과가 불변이므로 (체계, 부, 모) 키로 그대로 캐시
        self._cached = lru_cache(maxsize=self.config.cache_size)(self._aggregate)

    def compute_distribution(
        self,
        system: BloodGroupSystem,
        father: str,
        mother: str
    ) -> ProbabilityDistribution:
        """
        부모 표현형으로부터 자녀 표현형 확률 분포 계산

        Args:
            system: 혈액형 체계 (ABO_RH 합성 패널 포함)
            father: 아버지 표현형
            mother: 어머니 표현형

        Returns:
            ProbabilityDistribution

        Raises:
            UnknownPhenotype: 체계의 표현형 목록에 없는 입력
        """
        father_label = ''.join(split_phenotype(system, father))
        mother_label = ''.join(split_phenotype(system, mother))
        return self._cached(system, father_label, mother_label)

    def compute_offspring_report(
        self,
        father: Mapping,
        mother: Mapping
    ) -> Dict[BloodGroupSystem, ProbabilityDistribution]:
        """
        여러 체계를 한 번에 계산 (양쪽 부모 모두 입력된 체계만)

        Args:
            father: {체계: 표현형}
            mother: {체계: 표현형}
        """
        father_by_system = _index_by_system(father)
        mother_by_system = _index_by_system(mother)

        report = {}
        for system in BloodGroupSystem:
            if system in father_by_system and system in mother_by_system:
                report[system] = self.compute_distribution(
                    system, father_by_system[system], mother_by_system[system]
                )
        return report

    def cache_info(self):
        return self._cached.cache_info()

    def clear_cache(self):
        self._cached.cache_clear()

    @staticmethod
    def _aggregate(
        system: BloodGroupSystem,
        father: str,
        mother: str
    ) -> ProbabilityDistribution:
        """좌위별 교배 → 표현형 결정 → 빈도 집계 → 정규화"""
        loci = PANELS[system]
        father_parts = split_phenotype(system, father)
        mother_parts = split_phenotype(system, mother)

        crosses = [
            combine(locus.alleles_for(f), locus.alleles_for(m))
            for locus, f, m in zip(loci, father_parts, mother_parts)
        ]

        counts = Counter()
        for pairs in product(*crosses):
            label = ''.join(
                locus.resolve(first, second)
                for locus, (first, second) in zip(loci, pairs)
            )
            counts[label] += 1

        total = 1
        for cross in crosses:
            total *= len(cross)

        options = PHENOTYPE_OPTIONS[system]
        unexpected = set(counts) - set(options)
        if unexpected:
            raise InternalConsistencyError(system, sorted(unexpected))

        entries = tuple(
            PhenotypeProbability(
                phenotype=phenotype,
                count=counts[phenotype],
                probability=counts[phenotype] / total
            )
            for phenotype in options
            if counts[phenotype] > 0
        )

        logger.debug(
            "%s %s x %s: %d combinations -> %s",
            system.value, father, mother, total,
            {e.phenotype: e.count for e in entries}
        )
        return ProbabilityDistribution(system=system, entries=entries, total=total)


def _index_by_system(phenotypes: Mapping) -> Dict[BloodGroupSystem, str]:
    indexed = {}
    for key, value in phenotypes.items():
        if value is None:
            continue
        system = key if isinstance(key, BloodGroupSystem) else BloodGroupSystem.from_name(key)
        indexed[system] = value
    return indexed


default_engine = GeneticsEngine()


def compute_distribution(
    system: BloodGroupSystem,
    father: str,
    mother: str
) -> ProbabilityDistribution:
    """
    편의 함수: 기본 엔진으로 확률 분포 계산
    """
    return default_engine.compute_distribution(system, father, mother)


def compute_offspring_report(
    father: Mapping,
    mother: Mapping
) -> Dict[BloodGroupSystem, ProbabilityDistribution]:
    """편의 함수: 여러 체계 확률 분포 계산"""
    return default_engine.compute_offspring_report(father, mother)
