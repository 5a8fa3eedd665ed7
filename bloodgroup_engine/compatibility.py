"""
compatibility.py - 적혈구 수혈 적합성 (ABO + Rh)
"""

from typing import List

from .alleles import ABO_RH_OPTIONS, MINUS, split_abo_rh
from .i18n import translate
from .models import BloodGroupSystem, CompatibilityEntry, ProbabilityDistribution

# 수혈자 ABO → 받을 수 있는 공혈자 ABO
ABO_ACCEPTS = {
    'AB': ('A', 'B', 'AB', 'O'),
    'A': ('A', 'O'),
    'B': ('B', 'O'),
    'O': ('O',),
}


def can_donate(donor: str, recipient: str) -> bool:
    """
    공혈자 → 수혈자 적혈구 수혈 가능 여부

    ABO: 수혈자가 가진 항체와 반응하지 않아야 함
    Rh: Rh+ 공혈자는 Rh− 수혈자에게 줄 수 없음

    Raises:
        UnknownPhenotype: ABO/Rh 8종 라벨이 아닌 입력
    """
    donor_abo, donor_rh = split_abo_rh(donor)
    recipient_abo, recipient_rh = split_abo_rh(recipient)

    abo_ok = donor_abo in ABO_ACCEPTS[recipient_abo]
    rh_ok = not (donor_rh == '+' and recipient_rh == MINUS)
    return abo_ok and rh_ok


def compatible_donors(recipient: str) -> List[str]:
    """수혈자가 받을 수 있는 공혈자 목록 (표시 순서)"""
    return [donor for donor in ABO_RH_OPTIONS if can_donate(donor, recipient)]


def compatible_recipients(donor: str) -> List[str]:
    """공혈자가 줄 수 있는 수혈자 목록 (표시 순서)"""
    return [recipient for recipient in ABO_RH_OPTIONS if can_donate(donor, recipient)]


def compatibility_report(distribution: ProbabilityDistribution) -> List[CompatibilityEntry]:
    """자녀에게 가능한 각 ABO/Rh 표현형의 수혈 적합성"""
    if distribution.system is not BloodGroupSystem.ABO_RH:
        raise ValueError(
            f"적합성 보고서는 {BloodGroupSystem.ABO_RH.value} 분포만 지원: "
            f"{distribution.system.value}"
        )

    return [
        CompatibilityEntry(
            phenotype=phenotype,
            can_receive_from=compatible_donors(phenotype),
            can_donate_to=compatible_recipients(phenotype)
        )
        for phenotype in distribution.phenotypes
    ]


def relative_donation_advisory(language: str = 'en') -> dict:
    """가족 간 수혈 주의 문구 (TA-GVHD 예방을 위한 방사선 조사)"""
    return {
        'title': translate('relative_donation_title', language),
        'description': translate('relative_donation_body', language)
    }
