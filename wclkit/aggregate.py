"""An exception that groups several errors, plus helpers to build and reshape one."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor, as_completed

Matcher = Callable[[BaseException], bool]


class PreconditionViolatedError(Exception):
    """Raised when a precondition is violated."""

    def __init__(self, message: str = "precondition is violated") -> None:
        super().__init__(message)


class AggregateError(Exception):
    """Several errors reported as one.

    Nested aggregates are walked when the message is built and when
    searching for a particular error.
    """

    def __init__(self, errors: Iterable[BaseException]) -> None:
        self.errors: list[BaseException] = list(errors)
        super().__init__(*self.errors)

    def _leaves(self):
        for err in self.errors:
            if isinstance(err, AggregateError):
                yield from err._leaves()
            else:
                yield err

    def __str__(self) -> str:
        if not self.errors:
            return ""
        if len(self.errors) == 1:
            return str(self.errors[0])
        seen: list[str] = []
        for err in self._leaves():
            message = str(err)
            if message not in seen:
                seen.append(message)
        if len(seen) == 1:
            return seen[0]
        return "[" + ", ".join(seen) + "]"

    def __repr__(self) -> str:
        return f"AggregateError({self.errors!r})"

    def contains(self, target: BaseException | type[BaseException]) -> bool:
        """Return True if any contained error is, or was caused by, target.

        target may be an exception instance (matched by identity) or an
        exception class (matched with isinstance).
        """
        return any(_matches(err, target) for err in self._leaves())


def _matches(err: BaseException | None, target) -> bool:
    seen: set[int] = set()
    while err is not None and id(err) not in seen:
        seen.add(id(err))
        if err is target:
            return True
        if isinstance(target, type) and isinstance(err, target):
            return True
        if isinstance(err, AggregateError) and err.contains(target):
            return True
        err = err.__cause__
    return False


def new_aggregate(errlist: Iterable[BaseException | None] | None) -> AggregateError | None:
    """Build an AggregateError from the non-None errors, or return None if there are none."""
    errors = [err for err in errlist or () if err is not None]
    if not errors:
        return None
    return AggregateError(errors)


def _matches_any(err: BaseException, matchers: tuple[Matcher, ...]) -> bool:
    return any(matcher(err) for matcher in matchers)


def _filter_errors(errors: Iterable[BaseException], matchers: tuple[Matcher, ...]) -> list[BaseException]:
    result = []
    for err in errors:
        kept = filter_out(err, *matchers)
        if kept is not None:
            result.append(kept)
    return result


def filter_out(err: BaseException | None, *matchers: Matcher) -> BaseException | None:
    """Drop every error that any matcher accepts.

    Aggregates are filtered recursively; None is returned when nothing remains.
    """
    if err is None:
        return None
    if isinstance(err, AggregateError):
        return new_aggregate(_filter_errors(err.errors, matchers))
    if _matches_any(err, matchers):
        return None
    return err


def flatten(agg: AggregateError | None) -> AggregateError | None:
    """Return one aggregate holding every error of arbitrarily nested aggregates."""
    if agg is None:
        return None
    result: list[BaseException] = []
    for err in agg.errors:
        if isinstance(err, AggregateError):
            inner = flatten(err)
            if inner is not None:
                result.extend(inner.errors)
        elif err is not None:
            result.append(err)
    return new_aggregate(result)


def create_aggregate_from_message_count_map(counts: Mapping[str, int] | None) -> AggregateError | None:
    """Build an aggregate with one error per message, noting how often it repeated."""
    if counts is None:
        return None
    errors: list[BaseException] = []
    for message, count in counts.items():
        suffix = f" (repeated {count} times)" if count > 1 else ""
        errors.append(Exception(f"{message}{suffix}"))
    return new_aggregate(errors)


def reduce_error(err: BaseException | None) -> BaseException | None:
    """Unwrap an aggregate of one error; turn an empty aggregate into None."""
    if isinstance(err, AggregateError):
        if len(err.errors) == 1:
            return err.errors[0]
        if not err.errors:
            return None
    return err


def aggregate_concurrently(*funcs: Callable[[], object]) -> AggregateError | None:
    """Run the callables in parallel threads and aggregate whatever they raise."""
    if not funcs:
        return None
    errors: list[BaseException] = []
    with ThreadPoolExecutor(max_workers=len(funcs)) as pool:
        futures = [pool.submit(func) for func in funcs]
        for future in as_completed(futures):
            exc = future.exception()
            if exc is not None:
                errors.append(exc)
    return new_aggregate(errors)