"""
risks.py - 유전/면역 위험 소견 평가
부모 표현형과 자녀 확률 분포로 신생아 용혈성 질환 등 안내 문구 생성

규칙은 선언 순서대로 독립 평가되며 여러 개가 동시에 발동할 수 있다.
수치 심각도는 없다.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Tuple, Union

from .alleles import MINUS, normalize_phenotype
from .i18n import check_language, translate
from .models import BloodGroupSystem, ProbabilityDistribution, RiskFinding

logger = logging.getLogger(__name__)

ParentInput = Union[str, Mapping]
OffspringInput = Union[ProbabilityDistribution, Mapping]

K_NEGATIVE = f'K{MINUS}'
DUFFY_NULL = f'Fy(a{MINUS}b{MINUS})'


def rh_component(system: BloodGroupSystem, phenotype: str) -> str:
    """'AB−' → '−', Rh 단독 패널은 그대로"""
    return phenotype[-1] if system is BloodGroupSystem.ABO_RH else phenotype


def abo_component(system: BloodGroupSystem, phenotype: str) -> str:
    """'AB−' → 'AB', ABO 단독 패널은 그대로"""
    return phenotype[:-1] if system is BloodGroupSystem.ABO_RH else phenotype


# ============================================================
# 규칙 조건
# (체계, 아버지 표현형 또는 None, 어머니 표현형 또는 None, 자녀 분포) → 발동 여부
# ============================================================

def _rh_incompatibility(system, father, mother, offspring) -> bool:
    return (rh_component(system, mother) == MINUS
            and any(rh_component(system, p) == '+' for p in offspring.phenotypes))


def _abo_hemolytic(system, father, mother, offspring) -> bool:
    return (abo_component(system, mother) == 'O'
            and any(abo_component(system, p) in ('A', 'B', 'AB')
                    for p in offspring.phenotypes))


def _kell_incompatibility(system, father, mother, offspring) -> bool:
    return mother == K_NEGATIVE and father == 'K+' and 'K+' in offspring


def _duffy_protection(system, father, mother, offspring) -> bool:
    return DUFFY_NULL in offspring


@dataclass(frozen=True)
class RiskRule:
    """
    위험 규칙
    - key: 번역 키 접두사 (risk_<key>_title / risk_<key>_desc)
    - systems: 평가에 쓸 수 있는 체계 (앞에 있는 것 우선)
    - condition: 발동 조건
    - needs_parents: 어머니 표현형이 있어야 평가 (False면 자녀 분포만 사용)
    """
    key: str
    systems: Tuple[BloodGroupSystem, ...]
    condition: Callable[..., bool]
    needs_parents: bool = True

    def finding(self, language: str = 'en') -> RiskFinding:
        return RiskFinding(
            key=self.key,
            title=translate(f'risk_{self.key}_title', language),
            description=translate(f'risk_{self.key}_desc', language)
        )


RISK_RULES: Tuple[RiskRule, ...] = (
    RiskRule('rh', (BloodGroupSystem.ABO_RH, BloodGroupSystem.RH), _rh_incompatibility),
    RiskRule('abo', (BloodGroupSystem.ABO_RH, BloodGroupSystem.ABO), _abo_hemolytic),
    RiskRule('kell', (BloodGroupSystem.KELL,), _kell_incompatibility),
    RiskRule('duffy', (BloodGroupSystem.DUFFY,), _duffy_protection,
             needs_parents=False),
)


class RiskEvaluator:
    """
    위험 소견 평가기

    평가 항목:
    1. Rh 부적합 (어머니 Rh−, 자녀 Rh+ 가능)
    2. ABO 용혈성 질환 (어머니 O형, 자녀 A/B 가능)
    3. Kell 부적합 (어머니 K−, 아버지 K+, 자녀 K+ 가능)
    4. Duffy Fy(a−b−) 말라리아 저항성 (정보성)
    """

    def __init__(self, rules: Tuple[RiskRule, ...] = RISK_RULES):
        self.rules = rules

    def evaluate(
        self,
        father: ParentInput,
        mother: ParentInput,
        offspring: OffspringInput,
        language: str = 'en'
    ) -> List[RiskFinding]:
        """
        위험 소견 목록 (발동한 규칙이 없으면 빈 목록)

        Args:
            father: ABO/Rh 라벨 또는 {체계: 표현형}
            mother: ABO/Rh 라벨 또는 {체계: 표현형}
            offspring: 자녀 분포 하나 또는 {체계: 분포}
            language: 문구 언어
        """
        check_language(language)
        distributions = _offspring_by_system(offspring)
        fathers = _parent_by_system(father, distributions)
        mothers = _parent_by_system(mother, distributions)

        findings = []
        for rule in self.rules:
            system = next(
                (s for s in rule.systems
                 if s in distributions and (s in mothers or not rule.needs_parents)),
                None
            )
            if system is None:
                continue

            if rule.condition(system, fathers.get(system), mothers.get(system),
                              distributions[system]):
                logger.debug("risk rule '%s' triggered on %s", rule.key, system.value)
                findings.append(rule.finding(language))

        return findings


def _parent_by_system(
    parent: ParentInput,
    distributions: Mapping[BloodGroupSystem, ProbabilityDistribution]
) -> Dict[BloodGroupSystem, str]:
    """분포가 있는 체계의 표현형만 정규화"""
    if isinstance(parent, str):
        parent = {BloodGroupSystem.ABO_RH: parent}

    indexed = {}
    for key, value in parent.items():
        if value is None:
            continue
        system = key if isinstance(key, BloodGroupSystem) else BloodGroupSystem.from_name(key)
        if system not in distributions:
            continue
        indexed[system] = normalize_phenotype(system, value)
    return indexed


def _offspring_by_system(offspring: OffspringInput) -> Dict[BloodGroupSystem, ProbabilityDistribution]:
    if isinstance(offspring, ProbabilityDistribution):
        return {offspring.system: offspring}
    return {dist.system: dist for dist in offspring.values()}


_default_evaluator = RiskEvaluator()


def evaluate_risks(
    father: ParentInput,
    mother: ParentInput,
    offspring: OffspringInput,
    language: str = 'en'
) -> List[RiskFinding]:
    """
    편의 함수: 위험 소견 평가

    Returns:
        RiskFinding 목록 (규칙 선언 순서)
    """
    return _default_evaluator.evaluate(father, mother, offspring, language)
