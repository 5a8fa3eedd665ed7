"""
alleles.py - 표현형 → 대립유전자 표
표현형을 가진 사람이 보유/전달할 수 있는 대립유전자 목록

표현형 안의 각 대립유전자는 같은 확률로 전달된다고 가정한다.
(예: A형은 AA/AO를 구분하지 않고 A, O 를 1/2씩 전달)
집단 대립유전자 빈도는 반영하지 않는다.
"""

from typing import Dict, List, Tuple

from .errors import UnknownPhenotype
from .models import (
    BloodGroupSystem, AlleleSet,
    ABOAllele, RhAllele, KellAllele, MNAllele, DuffyAllele
)

MINUS = "−"   # U+2212, 표준 라벨에 쓰는 기호


ABO_ALLELES: Dict[str, AlleleSet] = {
    'A': (ABOAllele.A, ABOAllele.O),
    'B': (ABOAllele.B, ABOAllele.O),
    'AB': (ABOAllele.A, ABOAllele.B),
    'O': (ABOAllele.O,),
}

RH_ALLELES: Dict[str, AlleleSet] = {
    '+': (RhAllele.POSITIVE, RhAllele.NEGATIVE),
    MINUS: (RhAllele.NEGATIVE,),
}

KELL_ALLELES: Dict[str, AlleleSet] = {
    'K+': (KellAllele.K, KellAllele.k),
    f'K{MINUS}': (KellAllele.k, KellAllele.k),
}

MN_ALLELES: Dict[str, AlleleSet] = {
    'M': (MNAllele.M, MNAllele.M),
    'N': (MNAllele.N, MNAllele.N),
    'MN': (MNAllele.M, MNAllele.N),
}

DUFFY_ALLELES: Dict[str, AlleleSet] = {
    f'Fy(a+b{MINUS})': (DuffyAllele.A, DuffyAllele.O),
    f'Fy(a{MINUS}b+)': (DuffyAllele.B, DuffyAllele.O),
    'Fy(a+b+)': (DuffyAllele.A, DuffyAllele.B),
    f'Fy(a{MINUS}b{MINUS})': (DuffyAllele.O, DuffyAllele.O),
}

ALLELE_TABLES: Dict[BloodGroupSystem, Dict[str, AlleleSet]] = {
    BloodGroupSystem.ABO: ABO_ALLELES,
    BloodGroupSystem.RH: RH_ALLELES,
    BloodGroupSystem.KELL: KELL_ALLELES,
    BloodGroupSystem.MN: MN_ALLELES,
    BloodGroupSystem.DUFFY: DUFFY_ALLELES,
}

# 화면 표시 순서
ABO_OPTIONS = ('A', 'B', 'AB', 'O')
RH_OPTIONS = ('+', MINUS)
ABO_RH_OPTIONS = tuple(f"{abo}{rh}" for abo in ABO_OPTIONS for rh in RH_OPTIONS)

PHENOTYPE_OPTIONS: Dict[BloodGroupSystem, Tuple[str, ...]] = {
    BloodGroupSystem.ABO: ABO_OPTIONS,
    BloodGroupSystem.RH: RH_OPTIONS,
    BloodGroupSystem.ABO_RH: ABO_RH_OPTIONS,
    BloodGroupSystem.KELL: tuple(KELL_ALLELES),
    BloodGroupSystem.MN: tuple(MN_ALLELES),
    BloodGroupSystem.DUFFY: tuple(DUFFY_ALLELES),
}


def phenotype_options(system: BloodGroupSystem) -> List[str]:
    """체계의 표현형 목록 (표시 순서)"""
    return list(PHENOTYPE_OPTIONS[system])


def normalize_phenotype(system: BloodGroupSystem, phenotype) -> str:
    """
    입력 라벨을 표준 라벨로 변환

    앞뒤 공백 제거, ASCII '-' → '−' 외에는 어떤 치환도 하지 않는다.
    목록에 없으면 UnknownPhenotype.
    """
    if not isinstance(phenotype, str):
        raise UnknownPhenotype(system, phenotype)

    label = phenotype.strip().replace('-', MINUS)
    if label not in PHENOTYPE_OPTIONS[system]:
        raise UnknownPhenotype(system, phenotype)
    return label


def split_abo_rh(phenotype: str) -> Tuple[str, str]:
    """'AB−' → ('AB', '−')"""
    label = normalize_phenotype(BloodGroupSystem.ABO_RH, phenotype)
    return label[:-1], label[-1]


def alleles_for(system: BloodGroupSystem, phenotype: str) -> AlleleSet:
    """
    표현형이 전달할 수 있는 대립유전자 목록

    ABO/Rh 합성 패널은 split_abo_rh로 나눈 뒤 각 체계 표를 조회해야 한다.
    """
    if system.is_composite:
        raise ValueError(
            f"{system.value} 패널은 단일 대립유전자 표가 없음 (split_abo_rh 사용)"
        )
    label = normalize_phenotype(system, phenotype)
    return ALLELE_TABLES[system][label]
