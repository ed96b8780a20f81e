"""Knowledge distribution equalisation.

Given a common prior and one informant list per spy, the equaliser appends
informants to whichever spy is behind until both knowledge distributions put
identical weight on every knowledge state.

One step of the algorithm:

1. ``ks`` is the smallest knowledge state at which the two distributions
   disagree.  The spy with less weight at ``ks`` is the *smaller* side.
2. ``w`` is the weight the smaller side is missing at ``ks``.
3. ``ks0`` is the smaller side's least supported state above ``ks`` and
   ``ks1`` the next one (or 1 when ``ks0`` is the largest).
4. ``r = min(w, kd(ks0) * (ks1 - ks0) / (ks1 - ks))`` is the mass that can be
   moved from ``ks0`` down to ``ks`` without pushing the remainder past
   ``ks1``.
5. A new informant conditioned on ``ks0`` is solved for so that observing
   True happens with probability ``r / kd(ks0)`` and lands exactly on ``ks``.

Both distributions have the prior as their mean, so for a genuine inequality
the smaller side always has mass above ``ks``.  Each step either closes the
gap at ``ks`` or empties ``ks0``; states below ``ks`` are never touched.
"""

from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass
from fractions import Fraction
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from spymaster.channels import ConditionalTwoCoinChannel, TwoCoinChannel
from spymaster.config import MAX_EQUALIZATION_STEPS
from spymaster.distribution import KnowledgeDistribution
from spymaster.rational import ONE, InvalidProbabilityError, RationalLike, complement

logger = logging.getLogger(__name__)

InformantPair = Tuple[Tuple[ConditionalTwoCoinChannel, ...], Tuple[ConditionalTwoCoinChannel, ...]]

SPY_NAMES = ("A", "B")


class EqualizationError(RuntimeError):
    """Raised when an internal invariant of the equaliser is violated.

    This indicates a bug rather than bad input; the divergence that was being
    corrected is attached for diagnosis.
    """

    def __init__(self, message: str, inequality: Optional["Inequality"] = None) -> None:
        if inequality is not None:
            message = (
                f"{message} (state={inequality.state}, "
                f"smaller={inequality.smaller!r}, larger={inequality.larger!r})"
            )
        super().__init__(message)
        self.inequality = inequality


class EqualizationLimitError(EqualizationError):
    """Raised when equalisation does not finish within the step limit."""


@dataclass(frozen=True)
class Inequality:
    """The smallest knowledge state at which two distributions disagree."""

    state: Fraction
    smaller_side: int
    larger_side: int
    smaller: KnowledgeDistribution
    larger: KnowledgeDistribution

    @property
    def deficit(self) -> Fraction:
        """Weight the smaller side is missing at ``state``."""
        return self.larger.weight(self.state) - self.smaller.weight(self.state)


@dataclass(frozen=True)
class EqualizationStep:
    """Record of one synthesised informant and the numbers that produced it."""

    inequality: Inequality
    ks0: Fraction
    ks1: Fraction
    transfer: Fraction
    informant: ConditionalTwoCoinChannel

    @property
    def side(self) -> int:
        """Index of the spy the informant is appended to."""
        return self.inequality.smaller_side

    def as_dict(self) -> dict:
        return {
            "spy": SPY_NAMES[self.side],
            "ks": str(self.inequality.state),
            "w": str(self.inequality.deficit),
            "ks0": str(self.ks0),
            "ks1": str(self.ks1),
            "r": str(self.transfer),
            "informant": str(self.informant),
        }


def _merged_support(
    kd_a: KnowledgeDistribution,
    kd_b: KnowledgeDistribution,
) -> Iterator[Fraction]:
    """Union of two ascending supports, ascending and without duplicates."""
    previous: Optional[Fraction] = None
    for state in heapq.merge(kd_a, kd_b):
        if state != previous:
            yield state
            previous = state


def compare_distributions(
    kd_a: KnowledgeDistribution,
    kd_b: KnowledgeDistribution,
) -> Optional[Inequality]:
    """Return the smallest inequality between two distributions, or None."""
    distributions = (kd_a, kd_b)
    for state in _merged_support(kd_a, kd_b):
        weight_a = kd_a.weight(state)
        weight_b = kd_b.weight(state)
        if weight_a == weight_b:
            continue
        larger_side = 0 if weight_a > weight_b else 1
        smaller_side = 1 - larger_side
        return Inequality(
            state=state,
            smaller_side=smaller_side,
            larger_side=larger_side,
            smaller=distributions[smaller_side],
            larger=distributions[larger_side],
        )
    return None


def find_smallest_inequality(
    prior: RationalLike,
    informants_a: Iterable[ConditionalTwoCoinChannel],
    informants_b: Iterable[ConditionalTwoCoinChannel],
) -> Optional[Inequality]:
    """Build both spies' distributions and locate their smallest inequality.

    The scan is over the numeric order of knowledge states, so the result is
    deterministic regardless of how the informants were listed.

    Returns:
        The :class:`Inequality`, or ``None`` when the distributions are equal.
    """
    kd_a = KnowledgeDistribution(prior, informants_a)
    kd_b = KnowledgeDistribution(prior, informants_b)
    return compare_distributions(kd_a, kd_b)


def find_supporting_elements(
    state: Fraction,
    smaller: KnowledgeDistribution,
) -> Tuple[Fraction, Fraction]:
    """Return ``(ks0, ks1)`` bounding the interval mass is drawn from.

    ``ks0`` is the least state in *smaller*'s support strictly greater than
    *state*; ``ks1`` is the next supported state after it, or 1.

    Raises:
        EqualizationError: if *smaller* has no mass above *state*.
    """
    ks0 = smaller.successor(state)
    if ks0 is None:
        raise EqualizationError(f"no knowledge state above {state} in {smaller!r}")
    ks1 = smaller.successor(ks0)
    return ks0, ONE if ks1 is None else ks1


def synthesize_informant(inequality: Inequality) -> EqualizationStep:
    """Solve for the informant that corrects *inequality* as far as possible.

    Raises:
        EqualizationError: if the solved coin biases are not probabilities or
            the supporting interval is degenerate.
    """
    ks = inequality.state
    smaller = inequality.smaller
    ks0, ks1 = find_supporting_elements(ks, smaller)
    if ks1 <= ks0:
        raise EqualizationError(f"degenerate interval [{ks0}, {ks1}]", inequality)

    available = smaller.weight(ks0)
    transfer = min(inequality.deficit, available * (ks1 - ks0) / (ks1 - ks))

    outcome_true = transfer / available
    coin1 = ks * outcome_true / ks0
    coin2 = (outcome_true - ks0 * coin1) / complement(ks0)

    try:
        channel = TwoCoinChannel(coin1, coin2)
        new_informant = ConditionalTwoCoinChannel(ks0, channel)
    except InvalidProbabilityError as exc:
        raise EqualizationError(f"synthesised informant is invalid: {exc}", inequality) from exc

    return EqualizationStep(
        inequality=inequality,
        ks0=ks0,
        ks1=ks1,
        transfer=transfer,
        informant=new_informant,
    )


def iter_equalization(
    prior: RationalLike,
    informants: Tuple[Sequence[ConditionalTwoCoinChannel], Sequence[ConditionalTwoCoinChannel]],
    max_steps: Optional[int] = None,
) -> Iterator[EqualizationStep]:
    """Yield each equalisation step until the two distributions agree.

    The input sequences are never modified; each yielded step's informant has
    already been appended to the working copy of its side.

    Raises:
        EqualizationLimitError: if more than *max_steps* informants would be
            needed (defaults to ``MAX_EQUALIZATION_STEPS``).
    """
    limit = MAX_EQUALIZATION_STEPS if max_steps is None else max_steps
    working: List[List[ConditionalTwoCoinChannel]] = [list(informants[0]), list(informants[1])]
    distributions = [
        KnowledgeDistribution(prior, working[0]),
        KnowledgeDistribution(prior, working[1]),
    ]

    steps = 0
    while True:
        inequality = compare_distributions(distributions[0], distributions[1])
        if inequality is None:
            logger.debug("distributions equal after %d step(s)", steps)
            return
        if steps >= limit:
            raise EqualizationLimitError(
                f"distributions still differ after {limit} step(s)", inequality
            )

        step = synthesize_informant(inequality)
        side = step.side
        working[side].append(step.informant)
        distributions[side] = KnowledgeDistribution(prior, working[side])
        steps += 1

        logger.debug(
            "step %d: spy %s ks=%s w=%s ks0=%s ks1=%s r=%s -> %s",
            steps,
            SPY_NAMES[side],
            inequality.state,
            inequality.deficit,
            step.ks0,
            step.ks1,
            step.transfer,
            step.informant,
        )
        yield step


def find_additional_informants(
    prior: RationalLike,
    informants: Tuple[Sequence[ConditionalTwoCoinChannel], Sequence[ConditionalTwoCoinChannel]],
    max_steps: Optional[int] = None,
) -> InformantPair:
    """Extend both informant lists until their knowledge distributions agree.

    Args:
        prior: Common belief that the secret is True.
        informants: ``(spy_a, spy_b)`` informant sequences; not modified.
        max_steps: Optional cap on synthesised informants.

    Returns:
        ``(spy_a', spy_b')`` as new tuples; each is its input followed by the
        informants synthesised for that spy.

    Example:
        >>> from spymaster.channels import informant
        >>> a, b = find_additional_informants(Fraction(1, 2), ([], [informant("1/2", 1, 0)]))
        >>> [str(i) for i in a]
        ['1/2 0 1']
    """
    extended = [list(informants[0]), list(informants[1])]
    for step in iter_equalization(prior, informants, max_steps):
        extended[step.side].append(step.informant)

    added = (len(extended[0]) - len(informants[0]), len(extended[1]) - len(informants[1]))
    logger.info("equalised: added %d informant(s) to spy A, %d to spy B", *added)
    return tuple(extended[0]), tuple(extended[1])


def equalize_in_place(
    prior: RationalLike,
    informants: Sequence[List[ConditionalTwoCoinChannel]],
    max_steps: Optional[int] = None,
) -> None:
    """List-mutating variant: append the synthesised informants to *informants*."""
    spy_a, spy_b = informants
    extended_a, extended_b = find_additional_informants(prior, (spy_a, spy_b), max_steps)
    spy_a.extend(extended_a[len(spy_a):])
    spy_b.extend(extended_b[len(spy_b):])
