"""
visualizer.py - 확률 분포 도넛 차트 / 퍼넷 사각형 이미지
결과는 base64 PNG 문자열로 반환 (API 응답에 바로 사용)
"""

import io
import base64
from typing import Optional

import numpy as np

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle

from .config import VisualizationConfig
from .i18n import translate
from .models import BloodGroupSystem, ProbabilityDistribution
from .punnett import PunnettSquare

TITLE_KEYS = {
    BloodGroupSystem.ABO: 'abo_square_title',
    BloodGroupSystem.RH: 'rh_square_title',
    BloodGroupSystem.KELL: 'kell_title',
    BloodGroupSystem.MN: 'mn_title',
    BloodGroupSystem.DUFFY: 'duffy_title',
}


class DistributionVisualizer:
    def __init__(self, config: Optional[VisualizationConfig] = None):
        self.config = config or VisualizationConfig()

    def draw_distribution(
        self,
        distribution: ProbabilityDistribution,
        language: str = 'en',
        save_path: Optional[str] = None
    ) -> str:
        """확률 분포 도넛 차트"""
        cfg = self.config
        fig, ax = plt.subplots(figsize=(cfg.fig_width, cfg.fig_height))

        percents = np.array([e.probability for e in distribution]) * 100.0
        labels = [f"{e.phenotype} ({p:.1f}%)" for e, p in zip(distribution, percents)]
        colors = [cfg.chart_colors[i % len(cfg.chart_colors)] for i in range(len(percents))]

        wedges, _ = ax.pie(
            percents,
            colors=colors,
            startangle=90,
            counterclock=False,
            wedgeprops={'width': cfg.ring_width, 'edgecolor': 'white', 'linewidth': 1}
        )
        ax.legend(wedges, labels, loc='center left', bbox_to_anchor=(1.0, 0.5),
                  frameon=False, fontsize=cfg.font_size_legend)
        ax.set_title(translate('outcome_probabilities', language),
                     fontsize=cfg.font_size_title, fontweight='bold')
        ax.set_aspect('equal')

        return self._render(fig, save_path)

    def draw_punnett(
        self,
        square: PunnettSquare,
        language: str = 'en',
        save_path: Optional[str] = None
    ) -> str:
        """퍼넷 사각형 (행 = 어머니, 열 = 아버지)"""
        cfg = self.config
        sz = cfg.cell_size
        n_rows = len(square.mother_alleles)
        n_cols = len(square.father_alleles)

        fig, ax = plt.subplots(figsize=((n_cols + 1) * sz * 2, (n_rows + 1) * sz * 2 + 0.6))

        # 헤더 (아버지 대립유전자)
        for j, allele in enumerate(square.father_alleles):
            self._draw_cell(ax, (j + 1) * sz, n_rows * sz, allele, cfg.default_cell_color)

        # 행 (어머니 대립유전자 + 자녀 표현형)
        for i, (allele, row) in enumerate(zip(square.mother_alleles, square.cells)):
            y = (n_rows - 1 - i) * sz
            self._draw_cell(ax, 0, y, allele, cfg.default_cell_color)
            for j, phenotype in enumerate(row):
                self._draw_cell(ax, (j + 1) * sz, y, phenotype,
                                self._cell_color(square.system, phenotype), bold=True)

        title_key = TITLE_KEYS.get(square.system)
        if title_key:
            ax.set_title(translate(title_key, language),
                         fontsize=cfg.font_size_title, fontweight='bold')

        ax.set_xlim(-0.1, (n_cols + 1) * sz + 0.1)
        ax.set_ylim(-0.1, (n_rows + 1) * sz + 0.1)
        ax.set_aspect('equal')
        ax.axis('off')

        return self._render(fig, save_path)

    def _cell_color(self, system: BloodGroupSystem, phenotype: str) -> str:
        cfg = self.config
        if system is BloodGroupSystem.ABO:
            return cfg.abo_colors.get(phenotype, cfg.default_cell_color)
        if system is BloodGroupSystem.RH:
            return cfg.rh_colors.get(phenotype, cfg.default_cell_color)
        return cfg.default_cell_color

    def _draw_cell(self, ax, x, y, text, color, bold=False):
        cfg = self.config
        ax.add_patch(Rectangle((x, y), cfg.cell_size, cfg.cell_size,
                               facecolor=color, edgecolor=cfg.edge_color,
                               lw=cfg.line_width))
        ax.text(x + cfg.cell_size / 2, y + cfg.cell_size / 2, text,
                ha='center', va='center', fontsize=cfg.font_size_label,
                fontweight='bold' if bold else 'normal')

    def _render(self, fig, save_path: Optional[str]) -> str:
        cfg = self.config
        fig.tight_layout()

        if save_path:
            fig.savefig(save_path, dpi=cfg.dpi, bbox_inches='tight', facecolor='white')

        buf = io.BytesIO()
        fig.savefig(buf, format='png', dpi=cfg.dpi, bbox_inches='tight', facecolor='white')
        buf.seek(0)
        img_base64 = base64.b64encode(buf.read()).decode('utf-8')
        plt.close(fig)
        return img_base64
