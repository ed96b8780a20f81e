"""Knowledge distributions.

A knowledge distribution is the probability distribution over the beliefs
("knowledge states") a spy may end up holding after consulting an ordered
list of conditional informants, starting from a common prior.

Construction folds the informants into a mapping ``state -> weight``:

    {prior: 1}
    for each informant, in order:
        the branch at informant.condition (if any) is removed and split into
        the True and False observations:
            state'  = a_posteriori(state, outcome)
            weight' = weight * outcome_probability(state, outcome)
        impossible observations (probability 0) produce no branch
        branches landing on the same state are merged

Branches whose state differs from the condition are untouched, so an
informant whose condition is never reached is inert.
"""

from __future__ import annotations

from fractions import Fraction
from typing import Dict, Iterable, Iterator, Tuple

from spymaster.channels import ConditionalTwoCoinChannel
from spymaster.rational import ZERO, RationalLike, as_rational, require_probability


class KnowledgeDistribution:
    """Immutable distribution of knowledge states.

    Parameters
    ----------
    prior:
        The spy's belief that the secret is True before any informant reports.
    informants:
        Conditional channels consulted in order.
    """

    __slots__ = ("_prior", "_weights", "_support")

    def __init__(
        self,
        prior: RationalLike,
        informants: Iterable[ConditionalTwoCoinChannel] = (),
    ) -> None:
        self._prior = require_probability(prior, "prior")

        weights: Dict[Fraction, Fraction] = {self._prior: Fraction(1)}
        for inf in informants:
            mass = weights.pop(inf.condition, None)
            if mass is None:
                # Condition not reached: the informant abstains everywhere
                continue
            for outcome in (True, False):
                probability = inf.channel.outcome_probability(inf.condition, outcome)
                if probability == ZERO:
                    continue
                state = inf.channel.a_posteriori(inf.condition, outcome)
                weights[state] = weights.get(state, ZERO) + mass * probability

        self._support: Tuple[Fraction, ...] = tuple(sorted(weights))
        self._weights = weights

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def prior(self) -> Fraction:
        return self._prior

    def support(self) -> Tuple[Fraction, ...]:
        """Knowledge states with positive weight, ascending."""
        return self._support

    def weight(self, state: RationalLike) -> Fraction:
        """Probability mass at exactly *state*; zero outside the support."""
        return self._weights.get(as_rational(state), ZERO)

    def total_weight(self) -> Fraction:
        """Sum of all weights; always exactly one."""
        return sum(self._weights.values(), ZERO)

    def items(self) -> Iterator[Tuple[Fraction, Fraction]]:
        """``(state, weight)`` pairs in ascending state order."""
        for state in self._support:
            yield state, self._weights[state]

    def expected_belief(self) -> Fraction:
        """Mean knowledge state.

        Bayesian updating is a martingale, so this always equals the prior.
        """
        return sum((state * weight for state, weight in self.items()), ZERO)

    def successor(self, state: RationalLike) -> Fraction | None:
        """Least supported state strictly greater than *state*, if any."""
        bound = as_rational(state)
        for candidate in self._support:
            if candidate > bound:
                return candidate
        return None

    def equivalent(self, other: "KnowledgeDistribution") -> bool:
        """True iff both distributions put identical weight on every state."""
        return self._weights == other._weights

    def as_dict(self) -> Dict[str, str]:
        """JSON-friendly ``{"state": "weight"}`` mapping, ascending."""
        return {str(state): str(weight) for state, weight in self.items()}

    # ------------------------------------------------------------------
    # Container protocol
    # ------------------------------------------------------------------

    def __iter__(self) -> Iterator[Fraction]:
        return iter(self._support)

    def __len__(self) -> int:
        return len(self._support)

    def __contains__(self, state: object) -> bool:
        return state in self._weights

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KnowledgeDistribution):
            return NotImplemented
        return self.equivalent(other)

    def __hash__(self) -> int:
        return hash(tuple(self.items()))

    def __repr__(self) -> str:
        body = ", ".join(f"{state}: {weight}" for state, weight in self.items())
        return f"KnowledgeDistribution({{{body}}})"
