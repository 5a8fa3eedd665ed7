"""
config.py - 엔진 / 시각화 / API 설정값
"""

import os
from dataclasses import dataclass, field
from typing import Dict, Tuple


@dataclass
class EngineConfig:
    """계산 엔진 설정"""
    cache_size: int = 256           # (체계, 부, 모) 조합은 최대 100개 남짓
    default_language: str = 'en'


# ============================================================
# 색상 팔레트 (원래 웹 화면의 색 그대로)
# ============================================================
ABO_COLORS: Dict[str, str] = {
    'A': '#fecaca',     # red-200
    'B': '#bfdbfe',     # blue-200
    'AB': '#e9d5ff',    # purple-200
    'O': '#e5e7eb',     # gray-200
}

RH_COLORS: Dict[str, str] = {
    '+': '#bbf7d0',     # green-200
    '−': '#fecdd3',     # rose-200
}

CHART_COLORS: Tuple[str, ...] = (
    '#f87171', '#60a5fa', '#c084fc', '#fbbf24',
    '#34d399', '#f472b6', '#a3e635', '#facc15',
)


@dataclass
class VisualizationConfig:
    # 캔버스
    fig_width: float = 8.0
    fig_height: float = 5.0
    dpi: int = 150

    # 도넛 차트
    ring_width: float = 0.4
    chart_colors: Tuple[str, ...] = CHART_COLORS

    # 퍼넷 사각형
    cell_size: float = 0.8
    abo_colors: Dict[str, str] = field(default_factory=lambda: dict(ABO_COLORS))
    rh_colors: Dict[str, str] = field(default_factory=lambda: dict(RH_COLORS))
    default_cell_color: str = 'white'
    edge_color: str = 'black'
    line_width: float = 1.0

    font_size_title: int = 13
    font_size_label: int = 11
    font_size_legend: int = 10


@dataclass
class ApiConfig:
    host: str = '0.0.0.0'
    port: int = 5000
    debug: bool = False

    @classmethod
    def from_env(cls) -> 'ApiConfig':
        """환경 변수 BLOODGROUP_API_HOST / _PORT / _DEBUG 반영"""
        defaults = cls()
        debug = os.environ.get('BLOODGROUP_API_DEBUG', '')
        return cls(
            host=os.environ.get('BLOODGROUP_API_HOST', defaults.host),
            port=int(os.environ.get('BLOODGROUP_API_PORT', defaults.port)),
            debug=debug.lower() in ('1', 'true', 'yes', 'on') if debug else defaults.debug
        )
