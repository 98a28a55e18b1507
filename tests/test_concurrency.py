"""Tests for sharing messages and contexts across threads.

Messages, Args and Context are immutable and every formatting pass owns its
own state, so concurrent calls must produce the same output as serial ones.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from msgformat import ArgumentRef, Context, Message, Placeholder, PluralSelect, Select

MESSAGE = Message.of(
    Select.create("gender", female="She", male="He", other="They"),
    " sent ",
    PluralSelect.create(
        "count",
        exact={0: "nothing"},
        one=Message.of(Placeholder(), " file"),
        other=Message.of(Placeholder(), " files"),
    ),
    " to ",
    ArgumentRef("name"),
)


def _expected(gender: str, count: int, name: str) -> str:
    pronoun = {"female": "She", "male": "He"}.get(gender, "They")
    if count == 0:
        files = "nothing"
    elif count == 1:
        files = "1 file"
    else:
        files = f"{count:,} files"
    return f"{pronoun} sent {files} to {name}"


class TestConcurrentFormatting:
    """One Message and one Context used from many threads."""

    def test_shared_message_and_context(self) -> None:
        """Parallel results equal serial results."""
        ctx = Context.create("en")
        cases = [
            (gender, count, f"user{i}")
            for i, (gender, count) in enumerate(
                (g, c) for g in ("female", "male", "other") for c in range(0, 2000, 7)
            )
        ]

        def run(case: tuple[str, int, str]) -> str:
            gender, count, name = case
            return MESSAGE.format({"gender": gender, "count": count, "name": name}, ctx)

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(run, cases))

        assert results == [_expected(*case) for case in cases]

    def test_errors_do_not_leak_between_calls(self) -> None:
        """Each call reports only its own errors."""
        ctx = Context.create("en")

        def run(i: int) -> int:
            args = {"gender": "male", "count": i} if i % 2 else {"count": i}
            _result, errors = MESSAGE.format_with_errors(args, ctx)
            return len(errors)

        with ThreadPoolExecutor(max_workers=8) as pool:
            counts = list(pool.map(run, range(200)))

        # Odd calls miss 'name'; even calls miss 'gender' and 'name'
        assert counts == [2 if i % 2 == 0 else 1 for i in range(200)]

    def test_contexts_created_concurrently(self) -> None:
        """Context creation from many threads resolves consistent rules."""
        locales = ["en", "pl", "lv", "ar", "de", "fr", "ja", "ru"] * 10

        with ThreadPoolExecutor(max_workers=8) as pool:
            contexts = list(pool.map(Context.create, locales))

        for locale, ctx in zip(locales, contexts, strict=True):
            assert ctx.locale_code == locale
            assert not ctx.is_fallback
            assert ctx.classify(5) == Context.create(locale).classify(5)
