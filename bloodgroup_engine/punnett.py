"""
punnett.py - 퍼넷 사각형 생성기
행 = 어머니 대립유전자, 열 = 아버지 대립유전자, 칸 = 자녀 표현형
"""

from dataclasses import dataclass, field
from typing import List

from .alleles import alleles_for
from .genetics import LOCI
from .i18n import human_join, translate
from .models import BloodGroupSystem

PASS_TEXT_KEYS = {
    'mother': 'mother_can_pass',
    'father': 'father_can_pass',
}


@dataclass
class PunnettSquare:
    """단일 체계 퍼넷 사각형"""
    system: BloodGroupSystem
    father_alleles: List[str] = field(default_factory=list)
    mother_alleles: List[str] = field(default_factory=list)
    cells: List[List[str]] = field(default_factory=list)   # cells[행][열]

    def gametes(self, parent: str) -> List[str]:
        """부모가 전달할 수 있는 서로 다른 대립유전자 (순서 유지)"""
        if parent == 'father':
            alleles = self.father_alleles
        elif parent == 'mother':
            alleles = self.mother_alleles
        else:
            raise ValueError(f"parent는 'father' 또는 'mother': {parent!r}")
        return list(dict.fromkeys(alleles))

    def describe_gametes(self, parent: str, language: str = 'en') -> str:
        """'Mother can pass A or O.'"""
        prefix = translate(PASS_TEXT_KEYS[parent], language)
        return f"{prefix} {human_join(self.gametes(parent), language)}."

    def to_markdown(self) -> str:
        """마크다운 표 형식으로 변환"""
        if not self.cells:
            return ""

        headers = [""] + self.father_alleles
        header_line = "| " + " | ".join(headers) + " |"
        separator = "|" + "|".join(["---"] * len(headers)) + "|"

        data_lines = []
        for mother_allele, row in zip(self.mother_alleles, self.cells):
            data_lines.append("| " + " | ".join([mother_allele] + row) + " |")

        return "\n".join([header_line, separator] + data_lines)

    def to_dict(self) -> dict:
        return {
            'system': self.system.value,
            'father_alleles': list(self.father_alleles),
            'mother_alleles': list(self.mother_alleles),
            'cells': [list(row) for row in self.cells]
        }


def build_punnett(system: BloodGroupSystem, father: str, mother: str) -> PunnettSquare:
    """
    퍼넷 사각형 생성 (ABO/Rh 합성 패널은 ABO, Rh를 각각 만들어야 함)

    Raises:
        UnknownPhenotype: 체계의 표현형 목록에 없는 입력
    """
    locus = LOCI.get(system)
    if locus is None:
        raise ValueError(f"{system.value} 패널은 단일 좌위가 아님")

    father_set = alleles_for(system, father)
    mother_set = alleles_for(system, mother)

    cells = [
        [locus.resolve(f, m) for f in father_set]
        for m in mother_set
    ]

    return PunnettSquare(
        system=system,
        father_alleles=[a.value for a in father_set],
        mother_alleles=[a.value for a in mother_set],
        cells=cells
    )
