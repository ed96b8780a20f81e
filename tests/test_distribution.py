"""Tests for KnowledgeDistribution."""

from fractions import Fraction

import pytest

from spymaster.channels import informant
from spymaster.distribution import KnowledgeDistribution
from spymaster.rational import InvalidProbabilityError

HALF = Fraction(1, 2)


def _weights(kd: KnowledgeDistribution) -> dict:
    return dict(kd.items())


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_no_informants_is_point_mass_at_prior(self):
        kd = KnowledgeDistribution(HALF)
        assert kd.support() == (HALF,)
        assert kd.weight(HALF) == 1

    def test_prior_must_be_probability(self):
        with pytest.raises(InvalidProbabilityError):
            KnowledgeDistribution("3/2")

    def test_single_informant_splits_prior(self):
        kd = KnowledgeDistribution(HALF, [informant(HALF, "3/4", "1/4")])
        assert _weights(kd) == {Fraction(1, 4): HALF, Fraction(3, 4): HALF}

    def test_perfect_informant(self):
        kd = KnowledgeDistribution(HALF, [informant(HALF, 1, 0)])
        assert _weights(kd) == {Fraction(0): HALF, Fraction(1): HALF}

    def test_informants_apply_in_order(self):
        kd = KnowledgeDistribution(
            HALF,
            [informant(HALF, "3/4", "1/4"), informant("3/4", 1, 0)],
        )
        assert _weights(kd) == {
            Fraction(0): Fraction(1, 8),
            Fraction(1, 4): HALF,
            Fraction(1): Fraction(3, 8),
        }

    def test_order_matters(self):
        # The second informant's condition is not reachable until the first fires
        kd = KnowledgeDistribution(
            HALF,
            [informant("3/4", 1, 0), informant(HALF, "3/4", "1/4")],
        )
        assert _weights(kd) == {Fraction(1, 4): HALF, Fraction(3, 4): HALF}

    def test_degenerate_coin_gives_single_successor(self):
        kd = KnowledgeDistribution(HALF, [informant(HALF, 1, 1)])
        assert _weights(kd) == {HALF: Fraction(1)}

    def test_uninformative_informant_leaves_state(self):
        kd = KnowledgeDistribution(Fraction(1, 3), [informant("1/3", "2/5", "2/5")])
        assert _weights(kd) == {Fraction(1, 3): Fraction(1)}

    def test_certain_prior_is_absorbing(self):
        kd = KnowledgeDistribution(1, [informant(1, "1/2", "1/4")])
        assert _weights(kd) == {Fraction(1): Fraction(1)}

    def test_branches_on_same_state_merge(self):
        # Both 1/4 and 3/4 are driven to 0 or 1; masses on 0 and 1 merge
        kd = KnowledgeDistribution(
            HALF,
            [
                informant(HALF, "3/4", "1/4"),
                informant("1/4", 1, 0),
                informant("3/4", 1, 0),
            ],
        )
        assert _weights(kd) == {Fraction(0): HALF, Fraction(1): HALF}

    def test_accepts_any_iterable(self):
        informants = (informant(HALF, 1, 0) for _ in range(1))
        kd = KnowledgeDistribution(HALF, informants)
        assert len(kd) == 2


# ---------------------------------------------------------------------------
# Invariants and edge cases
# ---------------------------------------------------------------------------


class TestInvariants:
    def test_total_weight_is_one(self):
        kd = KnowledgeDistribution(
            Fraction(2, 7),
            [informant("2/7", "5/6", "1/3"), informant("1/3", "1/2", "1/9")],
        )
        assert kd.total_weight() == 1

    def test_expected_belief_is_prior(self):
        kd = KnowledgeDistribution(
            Fraction(2, 7),
            [informant("2/7", "5/6", "1/3"), informant("2/7", 1, 0)],
        )
        assert kd.expected_belief() == Fraction(2, 7)

    def test_inert_informant_changes_nothing(self):
        base = [informant(HALF, "3/4", "1/4")]
        kd = KnowledgeDistribution(HALF, base)
        with_inert = KnowledgeDistribution(HALF, base + [informant("1/3", 1, 0)])
        assert kd == with_inert

    def test_equal_fractions_are_interchangeable(self):
        a = KnowledgeDistribution("1/2", [informant("1/2", "3/4", "1/4")])
        b = KnowledgeDistribution("2/4", [informant("2/4", "6/8", "3/12")])
        assert a == b
        assert a.support() == b.support()
        assert repr(a) == repr(b)


# ---------------------------------------------------------------------------
# Accessors
# ---------------------------------------------------------------------------


class TestAccessors:
    @pytest.fixture()
    def kd(self) -> KnowledgeDistribution:
        return KnowledgeDistribution(
            HALF,
            [informant(HALF, "3/4", "1/4"), informant("3/4", 1, 0)],
        )

    def test_support_ascending(self, kd):
        assert kd.support() == (Fraction(0), Fraction(1, 4), Fraction(1))

    def test_iteration_is_restartable(self, kd):
        assert list(kd) == list(kd) == list(kd.support())

    def test_weight_outside_support_is_zero(self, kd):
        assert kd.weight(Fraction(3, 4)) == 0
        assert kd.weight("1/3") == 0

    def test_weight_accepts_text(self, kd):
        assert kd.weight("1/4") == HALF

    def test_contains(self, kd):
        assert Fraction(1, 4) in kd
        assert 1 in kd
        assert Fraction(3, 4) not in kd

    def test_successor(self, kd):
        assert kd.successor(0) == Fraction(1, 4)
        assert kd.successor(Fraction(1, 8)) == Fraction(1, 4)
        assert kd.successor(1) is None

    def test_as_dict(self, kd):
        assert kd.as_dict() == {"0": "1/8", "1/4": "1/2", "1": "3/8"}

    def test_repr(self, kd):
        assert repr(kd) == "KnowledgeDistribution({0: 1/8, 1/4: 1/2, 1: 3/8})"

    def test_not_equal_to_other_types(self, kd):
        assert kd != {"0": "1/8"}

    def test_hashable(self, kd):
        same = KnowledgeDistribution(
            HALF,
            [informant(HALF, "3/4", "1/4"), informant("3/4", 1, 0)],
        )
        assert len({kd, same}) == 1
