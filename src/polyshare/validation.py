"""Share-set well-formedness checks, run before any reconstruction."""

from polyshare.errors import (
    DuplicateIndex, InsufficientShares, InvalidIndex, InvalidShareValue,
)


def validate(shares: list, threshold: int = None) -> None:
    """Check that `shares` can be fed to the combiner.

    Args:
        shares: Sequence of Share objects.
        threshold: If given, the minimum number of shares the caller expects.
            K is not carried in a share, so sufficiency is only checked
            against this value.

    Raises:
        InsufficientShares: empty input, or fewer than `threshold` shares.
        InvalidIndex: an index that is not a positive integer.
        DuplicateIndex: the same index appears twice.
        InvalidShareValue: a value fails is_valid(), or values mix types.
    """
    if not shares:
        raise InsufficientShares("Need at least one share")
    if threshold is not None and len(shares) < threshold:
        raise InsufficientShares(
            f"Need at least {threshold} shares, got {len(shares)}")

    group = type(shares[0].value)
    seen = set()
    for share in shares:
        index = share.index
        if isinstance(index, bool) or not isinstance(index, int) or index <= 0:
            raise InvalidIndex(f"Share index must be a positive integer, got {index!r}")
        if index in seen:
            raise DuplicateIndex(f"Duplicate share index {index}")
        seen.add(index)
        if type(share.value) is not group:
            raise InvalidShareValue(
                f"Share {index} holds a {type(share.value).__name__}, "
                f"expected {group.__name__}")
        if not share.value.is_valid():
            raise InvalidShareValue(f"Share {index} has an out-of-range value")
