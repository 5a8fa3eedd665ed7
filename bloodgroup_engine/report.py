"""
report.py - 부모 표현형 → 전체 결과 딕셔너리
CLI(main.py)와 REST API(api.py)가 같은 결과 구조를 쓰도록 한 곳에서 조립
"""

import logging
from typing import Dict, Mapping, Optional, Union

from .alleles import split_abo_rh
from .compatibility import compatibility_report, relative_donation_advisory
from .genetics import GeneticsEngine, default_engine, split_phenotype
from .i18n import check_language
from .models import BloodGroupSystem
from .punnett import build_punnett
from .risks import evaluate_risks
from .visualizer import DistributionVisualizer

logger = logging.getLogger(__name__)

ParentInput = Union[str, Mapping]


def system_key(system: BloodGroupSystem) -> str:
    """JSON 키: BloodGroupSystem.ABO_RH → 'abo_rh'"""
    return system.name.lower()


def _as_mapping(parent: ParentInput) -> Mapping:
    if isinstance(parent, str):
        return {BloodGroupSystem.ABO_RH: parent}
    return parent


def build_report(
    father: ParentInput,
    mother: ParentInput,
    language: str = 'en',
    include_chart: bool = False,
    engine: Optional[GeneticsEngine] = None,
    visualizer=None
) -> Dict:
    """
    자녀 혈액형 결과 전체 구성

    Args:
        father: ABO/Rh 라벨 또는 {체계: 표현형}
        mother: ABO/Rh 라벨 또는 {체계: 표현형}
        language: 문구 언어 ('en' / 'bn')
        include_chart: True면 도넛 차트/퍼넷 이미지(base64) 포함
        engine: 계산 엔진 (None이면 기본 엔진)
        visualizer: DistributionVisualizer (include_chart일 때만 사용)

    Returns:
        결과 딕셔너리

    Raises:
        UnknownPhenotype: 잘못된 표현형 입력
    """
    check_language(language)
    engine = engine or default_engine
    father_map = _as_mapping(father)
    mother_map = _as_mapping(mother)

    distributions = engine.compute_offspring_report(father_map, mother_map)
    logger.debug("report systems: %s", [s.value for s in distributions])

    parents = {'father': {}, 'mother': {}}
    punnett = {}
    squares_built = []
    for system, dist in distributions.items():
        key = system_key(system)
        father_label = _parent_label(father_map, system)
        mother_label = _parent_label(mother_map, system)
        parents['father'][key] = father_label
        parents['mother'][key] = mother_label

        if system is BloodGroupSystem.ABO_RH:
            father_abo, father_rh = split_abo_rh(father_label)
            mother_abo, mother_rh = split_abo_rh(mother_label)
            squares = [
                build_punnett(BloodGroupSystem.ABO, father_abo, mother_abo),
                build_punnett(BloodGroupSystem.RH, father_rh, mother_rh),
            ]
        else:
            squares = [build_punnett(system, father_label, mother_label)]

        for square in squares:
            entry = square.to_dict()
            entry['father_can_pass'] = square.describe_gametes('father', language)
            entry['mother_can_pass'] = square.describe_gametes('mother', language)
            entry['markdown'] = square.to_markdown()
            punnett[system_key(square.system)] = entry
            squares_built.append(square)

    result = {
        'success': True,
        'language': language,
        'parents': parents,
        'distributions': {
            system_key(system): dist.to_dict()
            for system, dist in distributions.items()
        },
        'punnett': punnett,
        'risks': [
            f.to_dict()
            for f in evaluate_risks(father_map, mother_map, distributions, language)
        ],
    }

    primary = distributions.get(BloodGroupSystem.ABO_RH)
    if primary is not None:
        result['compatibility'] = [e.to_dict() for e in compatibility_report(primary)]
        result['relative_donation'] = relative_donation_advisory(language)

    if include_chart:
        visualizer = visualizer or DistributionVisualizer()
        images = {
            system_key(system): visualizer.draw_distribution(dist, language)
            for system, dist in distributions.items()
        }
        for square in squares_built:
            images[f"punnett_{system_key(square.system)}"] = \
                visualizer.draw_punnett(square, language)
        result['images'] = images

    return result


def _parent_label(parent: Mapping, system: BloodGroupSystem) -> str:
    """{체계 또는 이름: 표현형}에서 해당 체계 라벨을 표준형으로 조회"""
    for key, value in parent.items():
        key_system = key if isinstance(key, BloodGroupSystem) else BloodGroupSystem.from_name(key)
        if key_system is system:
            return ''.join(split_phenotype(system, value))
    raise KeyError(system)
