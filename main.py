"""
Blood Group Engine - 자녀 혈액형 확률 계산기
메인 실행 파일

사용법:
    python main.py --father A+ --mother O-                   # 기본 ABO/Rh 계산
    python main.py --father A+ --mother O- --lang bn         # 벵골어 문구
    python main.py --father AB+ --mother O- \\
        --kell-father K+ --kell-mother K- \\
        --duffy-father "Fy(a-b+)" --duffy-mother "Fy(a+b-)"  # 추가 체계
    python main.py --father B- --mother A+ --save --chart    # 결과/차트 저장
"""

import argparse
import base64
import json
import logging
import os
import sys
from datetime import datetime
from typing import Dict, Optional

from bloodgroup_engine import (
    BloodGroupSystem, UnknownPhenotype,
    EngineConfig, GeneticsEngine, DistributionVisualizer,
    SUPPORTED_LANGUAGES, build_report, translate
)

TITLE_KEYS = {
    'kell': 'kell_title',
    'mn': 'mn_title',
    'duffy': 'duffy_title',
}


class BloodGroupCalculator:
    """
    Blood Group Engine 메인 클래스
    결과 생성, 출력, 저장
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        self.engine = GeneticsEngine(self.config)
        self.visualizer = DistributionVisualizer()

    def generate_report(
        self,
        father: Dict[BloodGroupSystem, str],
        mother: Dict[BloodGroupSystem, str],
        language: Optional[str] = None,
        include_chart: bool = False
    ) -> dict:
        """
        부모 표현형으로 전체 결과 생성

        Raises:
            UnknownPhenotype: 잘못된 표현형 입력
        """
        result = build_report(
            father, mother,
            language=language or self.config.default_language,
            include_chart=include_chart,
            engine=self.engine,
            visualizer=self.visualizer
        )
        result['timestamp'] = datetime.now().isoformat()
        return result

    def display_report(self, result: dict):
        """결과를 콘솔에 표시"""
        lang = result['language']

        def t(key):
            return translate(key, lang)

        print("\n" + "=" * 60)
        print(f"🩸 {t('title')}")
        print("=" * 60)

        distributions = result['distributions']

        if 'abo_rh' in distributions:
            print(f"\n【{t('father_blood_group')}】 {result['parents']['father']['abo_rh']}")
            print(f"【{t('mother_blood_group')}】 {result['parents']['mother']['abo_rh']}")

            for key, title_key in (('abo', 'abo_square_title'), ('rh', 'rh_square_title')):
                square = result['punnett'][key]
                print(f"\n【{t(title_key)}】")
                print(square['markdown'])
                print(f"  • {square['mother_can_pass']}")
                print(f"  • {square['father_can_pass']}")

            print(f"\n【{t('outcome_probabilities')}】")
            self._print_distribution(distributions['abo_rh'], lang)

            print(f"\n【{t('compatibility_checker')}】")
            print(f"  {t('possible_baby_types')}")
            for entry in result['compatibility']:
                print(f"  {entry['phenotype']} {t('receive_from')} "
                      f"{', '.join(entry['can_receive_from'])} {t('donate_to')} "
                      f"{', '.join(entry['can_donate_to'])}.")

            advisory = result['relative_donation']
            print(f"\n⚠️ {advisory['title']}")
            print(f"  {advisory['description']}")

        extra = [key for key in ('kell', 'mn', 'duffy') if key in distributions]
        if extra:
            print(f"\n【{t('other_systems')}】")
            for key in extra:
                print(f"\n  {t(TITLE_KEYS[key])}: "
                      f"{result['parents']['father'][key]} x {result['parents']['mother'][key]}")
                self._print_distribution(distributions[key], lang)

        if result['risks']:
            print(f"\n【{t('genetic_risks')}】")
            for risk in result['risks']:
                print(f"  ⚠️ {risk['title']}")
                print(f"     {risk['description']}")

    def _print_distribution(self, distribution: dict, language: str):
        prefix = translate('probability_bullet_prefix', language)
        suffix = translate('probability_bullet_suffix', language)
        for item in distribution['probabilities']:
            print(f"  • {prefix} {item['probability'] * 100:.1f} % {suffix} {item['phenotype']}.")

    def save_report(self, result: dict, output_dir: str = "output"):
        """결과를 파일로 저장"""
        os.makedirs(output_dir, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        base_name = f"bloodgroup_{timestamp}"

        # JSON 데이터 저장 (이미지 제외)
        json_data = {k: v for k, v in result.items() if k != 'images'}
        json_path = os.path.join(output_dir, f"{base_name}.json")
        with open(json_path, 'w', encoding='utf-8') as f:
            json.dump(json_data, f, ensure_ascii=False, indent=2)
        print(f"✓ JSON 저장: {json_path}")

        for key, img in result.get('images', {}).items():
            img_path = os.path.join(output_dir, f"{base_name}_{key}.png")
            with open(img_path, 'wb') as f:
                f.write(base64.b64decode(img))
            print(f"✓ 차트 저장: {img_path}")


def parse_args(argv=None):
    """명령줄 인자 파싱"""
    parser = argparse.ArgumentParser(
        description="Blood Group Engine - 자녀 혈액형 확률 계산기"
    )

    parser.add_argument('--father', '-f', type=str, default=None,
                        help="아버지 ABO/Rh 혈액형 (예: A+, O-)")
    parser.add_argument('--mother', '-m', type=str, default=None,
                        help="어머니 ABO/Rh 혈액형 (예: AB+, B-)")

    parser.add_argument('--kell-father', type=str, default=None, help="아버지 Kell (K+ / K-)")
    parser.add_argument('--kell-mother', type=str, default=None, help="어머니 Kell (K+ / K-)")
    parser.add_argument('--mn-father', type=str, default=None, help="아버지 MN (M / N / MN)")
    parser.add_argument('--mn-mother', type=str, default=None, help="어머니 MN (M / N / MN)")
    parser.add_argument('--duffy-father', type=str, default=None,
                        help="아버지 Duffy (예: Fy(a+b-))")
    parser.add_argument('--duffy-mother', type=str, default=None,
                        help="어머니 Duffy (예: Fy(a-b+))")

    parser.add_argument('--lang', '-l', type=str, default='en',
                        choices=list(SUPPORTED_LANGUAGES),
                        help="표시 언어 (기본: en)")
    parser.add_argument('--output', '-o', type=str, default='output',
                        help="출력 디렉토리 (기본: output)")
    parser.add_argument('--save', action='store_true', help="결과를 파일로 저장")
    parser.add_argument('--chart', action='store_true', help="도넛 차트 및 퍼넷 이미지 생성")
    parser.add_argument('--no-display', action='store_true', help="콘솔 출력 생략")
    parser.add_argument('--verbose', '-v', action='store_true', help="디버그 로그 출력")

    return parser.parse_args(argv)


def collect_parents(args) -> tuple:
    """인자에서 체계별 부모 표현형 수집 (입력된 항목만)"""
    pairs = {
        BloodGroupSystem.ABO_RH: (args.father, args.mother),
        BloodGroupSystem.KELL: (args.kell_father, args.kell_mother),
        BloodGroupSystem.MN: (args.mn_father, args.mn_mother),
        BloodGroupSystem.DUFFY: (args.duffy_father, args.duffy_mother),
    }
    father, mother = {}, {}
    for system, (f, m) in pairs.items():
        if f and m:
            father[system] = f
            mother[system] = m
    return father, mother


def main(argv=None) -> int:
    """메인 함수"""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    father, mother = collect_parents(args)
    if not father:
        print(translate('prompt_select_parents', args.lang), file=sys.stderr)
        return 2

    calculator = BloodGroupCalculator()

    try:
        result = calculator.generate_report(
            father, mother,
            language=args.lang,
            include_chart=args.chart
        )
    except UnknownPhenotype as e:
        print(f"❌ 오류: {e}", file=sys.stderr)
        return 2

    # 출력
    if not args.no_display:
        calculator.display_report(result)

    # 저장
    if args.save:
        calculator.save_report(result, args.output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
