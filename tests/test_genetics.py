"""교배, 표현형 결정, 확률 분포 집계 테스트."""

from itertools import product

import pytest

from bloodgroup_engine import (
    BloodGroupSystem, GeneticsEngine, EngineConfig,
    InternalConsistencyError, UnknownPhenotype, InvalidPhenotype,
    combine, compute_distribution, compute_offspring_report,
    phenotype_options, resolve_phenotype
)
from bloodgroup_engine.genetics import LOCI
from bloodgroup_engine.models import ABOAllele, RhAllele, KellAllele, MNAllele, DuffyAllele

ALL_SYSTEMS = list(BloodGroupSystem)


def _all_pairs(system):
    options = phenotype_options(system)
    return list(product(options, options))


class TestCombine:
    def test_cartesian_product_size(self):
        pairs = combine(('A', 'O'), ('B', 'O'))
        assert len(pairs) == 4
        assert set(pairs) == {('A', 'B'), ('A', 'O'), ('O', 'B'), ('O', 'O')}

    def test_single_allele_sets(self):
        assert combine(('O',), ('O',)) == [('O', 'O')]

    def test_father_first_in_each_pair(self):
        pairs = combine((RhAllele.POSITIVE, RhAllele.NEGATIVE), (RhAllele.NEGATIVE,))
        assert pairs == [
            (RhAllele.POSITIVE, RhAllele.NEGATIVE),
            (RhAllele.NEGATIVE, RhAllele.NEGATIVE),
        ]


class TestResolvePhenotype:
    def test_abo_rules(self):
        A, B, O = ABOAllele.A, ABOAllele.B, ABOAllele.O
        assert resolve_phenotype(BloodGroupSystem.ABO, A, A) == 'A'
        assert resolve_phenotype(BloodGroupSystem.ABO, O, A) == 'A'
        assert resolve_phenotype(BloodGroupSystem.ABO, B, O) == 'B'
        assert resolve_phenotype(BloodGroupSystem.ABO, B, A) == 'AB'
        assert resolve_phenotype(BloodGroupSystem.ABO, O, O) == 'O'

    def test_rh_dominant(self):
        pos, neg = RhAllele.POSITIVE, RhAllele.NEGATIVE
        assert resolve_phenotype(BloodGroupSystem.RH, neg, pos) == '+'
        assert resolve_phenotype(BloodGroupSystem.RH, neg, neg) == '−'

    def test_kell_dominant(self):
        assert resolve_phenotype(BloodGroupSystem.KELL, KellAllele.k, KellAllele.K) == 'K+'
        assert resolve_phenotype(BloodGroupSystem.KELL, KellAllele.k, KellAllele.k) == 'K−'

    def test_mn_codominant(self):
        assert resolve_phenotype(BloodGroupSystem.MN, MNAllele.M, MNAllele.M) == 'M'
        assert resolve_phenotype(BloodGroupSystem.MN, MNAllele.N, MNAllele.N) == 'N'
        assert resolve_phenotype(BloodGroupSystem.MN, MNAllele.N, MNAllele.M) == 'MN'

    def test_duffy_codominant_with_null(self):
        A, B, O = DuffyAllele.A, DuffyAllele.B, DuffyAllele.O
        assert resolve_phenotype(BloodGroupSystem.DUFFY, A, B) == 'Fy(a+b+)'
        assert resolve_phenotype(BloodGroupSystem.DUFFY, A, O) == 'Fy(a+b−)'
        assert resolve_phenotype(BloodGroupSystem.DUFFY, O, B) == 'Fy(a−b+)'
        assert resolve_phenotype(BloodGroupSystem.DUFFY, O, O) == 'Fy(a−b−)'

    @pytest.mark.parametrize('system', list(LOCI))
    def test_total_over_alphabet(self, system):
        """알파벳의 모든 쌍이 목록 안의 표현형으로 결정됨"""
        locus = LOCI[system]
        for first, second in product(locus.allele_type, repeat=2):
            assert locus.resolve(first, second) in phenotype_options(system)

    def test_foreign_allele_is_internal_error(self):
        # Duffy 기호를 ABO 규칙에 넣으면 표/규칙 불일치
        with pytest.raises(InternalConsistencyError):
            resolve_phenotype(BloodGroupSystem.ABO, DuffyAllele.A, ABOAllele.O)

    def test_composite_panel_not_resolvable_directly(self):
        with pytest.raises(ValueError):
            resolve_phenotype(BloodGroupSystem.ABO_RH, ABOAllele.A, ABOAllele.O)


class TestConcreteDistributions:
    def test_ab_by_ab(self):
        dist = compute_distribution(BloodGroupSystem.ABO, 'AB', 'AB')
        assert dist.as_mapping() == {'A': 0.25, 'B': 0.25, 'AB': 0.5}
        assert dist.total == 4

    def test_rh_negative_mother_positive_father(self):
        dist = compute_distribution(BloodGroupSystem.RH, '+', '−')
        assert dist.as_mapping() == {'+': 0.5, '−': 0.5}
        assert dist.total == 2

    def test_o_neg_by_o_neg(self):
        dist = compute_distribution(BloodGroupSystem.ABO_RH, 'O−', 'O−')
        assert dist.as_mapping() == {'O−': 1.0}
        assert dist.total == 1

    def test_kell_pos_father_neg_mother(self):
        dist = compute_distribution(BloodGroupSystem.KELL, 'K+', 'K−')
        assert dist.as_mapping() == {'K+': 0.5, 'K−': 0.5}
        assert dist.total == 4

    def test_combined_panel_is_product_of_sub_panels(self):
        dist = compute_distribution(BloodGroupSystem.ABO_RH, 'A+', 'B+')
        abo = compute_distribution(BloodGroupSystem.ABO, 'A', 'B')
        rh = compute_distribution(BloodGroupSystem.RH, '+', '+')
        assert dist.total == abo.total * rh.total == 16
        for entry in dist:
            expected = abo.probability(entry.phenotype[:-1]) * rh.probability(entry.phenotype[-1])
            assert entry.probability == pytest.approx(expected)

    def test_a_pos_by_b_pos_counts(self):
        dist = compute_distribution(BloodGroupSystem.ABO_RH, 'A+', 'B+')
        counts = {e.phenotype: e.count for e in dist}
        assert counts == {
            'A+': 3, 'A−': 1, 'B+': 3, 'B−': 1,
            'AB+': 3, 'AB−': 1, 'O+': 3, 'O−': 1,
        }

    def test_mn_heterozygotes(self):
        dist = compute_distribution(BloodGroupSystem.MN, 'MN', 'MN')
        assert dist.as_mapping() == {'M': 0.25, 'N': 0.25, 'MN': 0.5}

    def test_duffy_null_possible(self):
        dist = compute_distribution(BloodGroupSystem.DUFFY, 'Fy(a+b−)', 'Fy(a−b+)')
        assert dist.as_mapping() == {
            'Fy(a+b−)': 0.25, 'Fy(a−b+)': 0.25, 'Fy(a+b+)': 0.25, 'Fy(a−b−)': 0.25,
        }

    def test_ascii_minus_accepted(self):
        assert compute_distribution(BloodGroupSystem.ABO_RH, 'O-', ' O- ') == \
            compute_distribution(BloodGroupSystem.ABO_RH, 'O−', 'O−')

    def test_output_follows_option_order(self):
        dist = compute_distribution(BloodGroupSystem.ABO_RH, 'AB+', 'AB+')
        options = phenotype_options(BloodGroupSystem.ABO_RH)
        assert dist.phenotypes == [p for p in options if p in dist]


class TestDistributionProperties:
    @pytest.mark.parametrize('system', ALL_SYSTEMS)
    def test_sums_to_one_and_positive(self, system):
        for father, mother in _all_pairs(system):
            dist = compute_distribution(system, father, mother)
            assert len(dist) > 0
            assert abs(sum(e.probability for e in dist) - 1.0) < 1e-9
            for entry in dist:
                assert 0 < entry.probability <= 1
                assert entry.count > 0

    @pytest.mark.parametrize('system', ALL_SYSTEMS)
    def test_symmetric_under_parent_swap(self, system):
        for father, mother in _all_pairs(system):
            forward = compute_distribution(system, father, mother)
            backward = compute_distribution(system, mother, father)
            assert forward.as_mapping() == backward.as_mapping()

    def test_deterministic_without_cache(self):
        first = GeneticsEngine(EngineConfig(cache_size=0))
        second = GeneticsEngine(EngineConfig(cache_size=0))
        for father, mother in _all_pairs(BloodGroupSystem.ABO_RH):
            assert first.compute_distribution(BloodGroupSystem.ABO_RH, father, mother) == \
                second.compute_distribution(BloodGroupSystem.ABO_RH, father, mother)

    def test_absent_phenotype_has_zero_probability(self):
        dist = compute_distribution(BloodGroupSystem.ABO, 'O', 'O')
        assert dist.probability('AB') == 0.0
        assert 'AB' not in dist


class TestErrors:
    def test_unknown_phenotype(self):
        with pytest.raises(UnknownPhenotype) as exc_info:
            compute_distribution(BloodGroupSystem.ABO, 'C', 'A')
        assert exc_info.value.system is BloodGroupSystem.ABO
        assert exc_info.value.phenotype == 'C'

    def test_invalid_phenotype_alias(self):
        assert InvalidPhenotype is UnknownPhenotype
        with pytest.raises(InvalidPhenotype):
            compute_distribution(BloodGroupSystem.KELL, 'K+', 'k')

    def test_empty_input(self):
        with pytest.raises(UnknownPhenotype):
            compute_distribution(BloodGroupSystem.MN, '', 'M')

    def test_label_of_other_system(self):
        with pytest.raises(UnknownPhenotype):
            compute_distribution(BloodGroupSystem.ABO, 'A+', 'O')

    def test_unknown_phenotype_is_value_error(self):
        with pytest.raises(ValueError):
            compute_distribution(BloodGroupSystem.DUFFY, 'Fy(a+)', 'Fy(a+b+)')


class TestEngine:
    def test_cache_hits(self):
        engine = GeneticsEngine(EngineConfig(cache_size=8))
        engine.compute_distribution(BloodGroupSystem.ABO_RH, 'A+', 'O−')
        engine.compute_distribution(BloodGroupSystem.ABO_RH, 'A+', 'O-')
        info = engine.cache_info()
        assert info.hits == 1
        assert info.misses == 1

        engine.clear_cache()
        assert engine.cache_info().currsize == 0

    def test_offspring_report_only_systems_given_for_both(self):
        report = compute_offspring_report(
            {BloodGroupSystem.ABO_RH: 'A+', 'kell': 'K+', 'mn': 'M'},
            {'abo_rh': 'O−', 'Kell': 'K−'}
        )
        assert set(report) == {BloodGroupSystem.ABO_RH, BloodGroupSystem.KELL}
        assert report[BloodGroupSystem.KELL].as_mapping() == {'K+': 0.5, 'K−': 0.5}

    def test_offspring_report_unknown_system_name(self):
        with pytest.raises(ValueError):
            compute_offspring_report({'lewis': 'Le(a+)'}, {'lewis': 'Le(a+)'})
