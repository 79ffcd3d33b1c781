# game/pack_system.py
"""
Выпадение карточек из набора.

Веса из pack_cards - это именно веса, а не вероятности: сумма по набору
не обязана быть равна 1.0. Нормализация происходит только в момент
розыгрыша - случайное число берётся из [0, total), где total - сумма весов.
"""
import math
import random
from bisect import bisect_right
from collections import Counter
from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence, Tuple

from game.constants import MAX_DROP_CHANCE, MIN_DROP_CHANCE
from game.errors import EmptyPackError, MisconfiguredPackError

_default_rng = random.Random()


class CumulativeWeights(NamedTuple):
    card_ids: List[int]
    cumulative: List[float]  # строго возрастает
    total: float


def build_cumulative_weights(entries: Iterable[Tuple[int, float]]) -> CumulativeWeights:
    """Превратить пары (card_id, вес) в префиксные суммы весов"""
    entries = list(entries)
    if not entries:
        raise EmptyPackError()

    card_ids = []
    cumulative = []
    total = 0.0

    for card_id, weight in entries:
        weight = float(weight)
        if math.isnan(weight) or not MIN_DROP_CHANCE <= weight <= MAX_DROP_CHANCE:
            raise MisconfiguredPackError(
                f"Набор настроен неверно: вес карточки {card_id} вне диапазона [0, 1]"
            )
        # Карточка с нулевым весом никогда не выпадет
        if weight == 0:
            continue

        total += weight
        card_ids.append(card_id)
        cumulative.append(total)

    if total <= 0:
        raise MisconfiguredPackError()

    return CumulativeWeights(card_ids, cumulative, total)


def draw_card(weights: CumulativeWeights, rng: Optional[random.Random] = None) -> int:
    """Разыграть одну карточку: первая, чей накопленный вес строго больше r"""
    rng = rng or _default_rng
    r = rng.random() * weights.total

    index = bisect_right(weights.cumulative, r)
    # r * total может округлиться ровно до total
    if index >= len(weights.card_ids):
        index = len(weights.card_ids) - 1

    return weights.card_ids[index]


def draw_cards(
    weights: CumulativeWeights,
    count: int,
    rng: Optional[random.Random] = None,
) -> List[int]:
    """
    Разыграть count карточек независимо (с возвращением).

    Дубликаты ожидаемы, count может превышать число разных карточек в наборе.
    """
    if count < 1:
        raise MisconfiguredPackError(
            "Набор настроен неверно: количество карточек за открытие должно быть положительным"
        )

    rng = rng or _default_rng
    return [draw_card(weights, rng) for _ in range(count)]


def drop_probabilities(entries: Sequence[Tuple[int, float]]) -> Dict[int, float]:
    """Фактическая вероятность выпадения каждой карточки за один розыгрыш"""
    weights = build_cumulative_weights(entries)
    return {
        card_id: float(weight) / weights.total
        for card_id, weight in entries
    }


def simulate_drop_rates(
    weights: CumulativeWeights,
    opens: int,
    cards_per_open: int,
    rng: Optional[random.Random] = None,
) -> Dict[int, float]:
    """Прогнать opens открытий и вернуть наблюдаемую долю каждой карточки"""
    if opens < 1:
        raise ValueError("opens должно быть положительным")

    rng = rng or _default_rng
    counts = Counter()

    for _ in range(opens):
        counts.update(draw_cards(weights, cards_per_open, rng))

    total_draws = opens * cards_per_open
    return {card_id: counts[card_id] / total_draws for card_id in weights.card_ids}
