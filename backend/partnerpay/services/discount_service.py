"""
Discount Service

Tiered and conditional percentage discounts on a trusted total amount.

Rules (amount T in cents):
- Base tier: <20000: 0%, 20000-50000: 5%, 50000-80000: 7%, 80000-120000: 10%, above: 15%
  (upper bounds inclusive)
- +8% if T > 50000 and T is prime
- +10% if T > 90000 and the last digit of T // 100 is 5
- Applied percentage is capped at 20%
- Discount is rounded to whole cents, half away from zero
"""
import logging
from decimal import Decimal, ROUND_HALF_UP

from ..models.pipeline import DiscountBreakdown

logger = logging.getLogger(__name__)

# (inclusive upper bound, percent); amounts above the last bound get TOP_TIER_PERCENT
BASE_TIERS = (
    (19999, Decimal("0.00")),
    (50000, Decimal("0.05")),
    (80000, Decimal("0.07")),
    (120000, Decimal("0.10")),
)
TOP_TIER_PERCENT = Decimal("0.15")

PRIME_BONUS_THRESHOLD = 50000
PRIME_BONUS_PERCENT = Decimal("0.08")

DIGIT_BONUS_THRESHOLD = 90000
DIGIT_BONUS_PERCENT = Decimal("0.10")

MAX_DISCOUNT_PERCENT = Decimal("0.20")


# Miller-Rabin with these witnesses is exact for every n < 3.3 * 10**24,
# which covers all signed 64-bit amounts
PRIME_WITNESSES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)


def is_prime(number: int) -> bool:
    """
    Deterministic Miller-Rabin primality test.

    Runs in a handful of modular exponentiations, so amounts near 2**63
    are priced as quickly as small ones.
    """
    if number <= 1:
        return False
    for witness in PRIME_WITNESSES:
        if number % witness == 0:
            return number == witness

    d = number - 1
    r = 0
    while d % 2 == 0:
        d //= 2
        r += 1

    for witness in PRIME_WITNESSES:
        x = pow(witness, d, number)
        if x == 1 or x == number - 1:
            continue
        for _ in range(r - 1):
            x = pow(x, 2, number)
            if x == number - 1:
                break
        else:
            return False
    return True


def base_discount_percent(total_amount: int) -> Decimal:
    for upper_bound, percent in BASE_TIERS:
        if total_amount <= upper_bound:
            return percent
    return TOP_TIER_PERCENT


def calculate_discount(total_amount: int) -> DiscountBreakdown:
    """
    Calculate the discount and final amount for a total.

    Args:
        total_amount: Validated total in cents

    Returns:
        DiscountBreakdown with the percentages applied and the amounts
    """
    base_percent = base_discount_percent(total_amount)

    prime_bonus = Decimal("0.00")
    if total_amount > PRIME_BONUS_THRESHOLD and is_prime(total_amount):
        prime_bonus = PRIME_BONUS_PERCENT

    digit_bonus = Decimal("0.00")
    if total_amount > DIGIT_BONUS_THRESHOLD and (total_amount // 100) % 10 == 5:
        digit_bonus = DIGIT_BONUS_PERCENT

    applied_percent = min(base_percent + prime_bonus + digit_bonus, MAX_DISCOUNT_PERCENT)

    discount = int((Decimal(total_amount) * applied_percent).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    final_amount = total_amount - discount

    logger.debug(
        f"Discount calculation: total={total_amount}, base={base_percent}, "
        f"prime_bonus={prime_bonus}, digit_bonus={digit_bonus}, applied={applied_percent}, "
        f"discount={discount}, final={final_amount}"
    )

    return DiscountBreakdown(
        total_amount=total_amount,
        base_percent=base_percent,
        prime_bonus=prime_bonus,
        digit_bonus=digit_bonus,
        applied_percent=applied_percent,
        discount=discount,
        final_amount=final_amount,
    )
