from __future__ import annotations

import string

from hypothesis import given
from hypothesis import strategies as st

from fold_scanner.constants import REGION_NAME_MAX, TRUNCATE_LOOKAHEAD
from fold_scanner.models import FoldKind
from fold_scanner.scanner import FoldScanner, generate_folds, truncate_name

JS_REGIONS = ["//#region", "//#endregion"]
JS_COMMENTS = ["/*", "*/", "//", "//"]

# Text built from delimiter fragments so the passes actually interact.
fragment_strategy = st.sampled_from(
    ["//#region ", "//#endregion", "/*", "*/", "//", "{", "}", "function ", "f()", " ", "\n", "\r\n", "x"]
)
document_strategy = st.lists(fragment_strategy, max_size=60).map("".join)

region_name_strategy = st.text(
    alphabet=string.ascii_letters + string.digits, min_size=1, max_size=30
)


@given(document_strategy)
def test_scan_is_deterministic(text: str):
    """Property: fresh scanners over identical text report identical folds."""
    first = generate_folds(text, JS_REGIONS, JS_COMMENTS, True)
    second = generate_folds(text, JS_REGIONS, JS_COMMENTS, True)

    assert first == second


@given(document_strategy)
def test_folds_are_well_formed(text: str):
    longest_marker = max(len(marker) for marker in JS_REGIONS + JS_COMMENTS)
    name_bound = REGION_NAME_MAX + TRUNCATE_LOOKAHEAD + 2 * (longest_marker + 1)

    for fold in generate_folds(text, JS_REGIONS, JS_COMMENTS, True):
        assert fold.name
        assert fold.name == fold.name.strip()
        assert "\n" not in fold.name and "\r" not in fold.name
        assert len(fold.name) <= name_bound
        assert 1 <= fold.start_line < fold.end_line


@given(st.text(max_size=200))
def test_arbitrary_text_never_raises(text: str):
    generate_folds(text, JS_REGIONS, JS_COMMENTS, True)


@given(document_strategy)
def test_region_folds_never_share_offsets(text: str):
    scanner = FoldScanner(text, region_pairs=JS_REGIONS)
    folds = scanner.generate_folds()

    # Two claimed offsets per fold means no boundary was reused.
    assert len(scanner.state.claimed_offsets) == 2 * len(folds)


@given(st.lists(region_name_strategy, min_size=1, max_size=10))
def test_each_balanced_region_yields_its_name(names):
    text = "".join(f"<!--#region {name}-->\nbody\n<!--#endregion-->\n" for name in names)

    folds = generate_folds(text, region_pairs=["<!--#region", "<!--#endregion-->"])

    assert sorted(fold.name for fold in folds) == sorted(names)
    assert all(fold.kind is FoldKind.NAMED_REGION for fold in folds)
    assert sorted((fold.start_line, fold.last_line) for fold in folds) == [
        (3 * index + 1, 3 * index + 3) for index in range(len(names))
    ]


@given(st.text(alphabet=string.ascii_letters + " ", max_size=120))
def test_truncated_names_stay_near_the_limit(name: str):
    name = name.strip()
    truncated = truncate_name(name)

    if len(name) <= REGION_NAME_MAX:
        assert truncated == name
    else:
        assert len(truncated) <= REGION_NAME_MAX + TRUNCATE_LOOKAHEAD
        assert name.startswith(truncated)
