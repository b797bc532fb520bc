"""Shared checks for reflow results."""

import random

from phloem import Widget

TOLERANCE = 1e-6


def by_id(widgets):
    return {w.id: w for w in widgets}


def x_overlap(a, b):
    return a.x < b.x + b.width and a.x + a.width > b.x


def assert_invariants(before, after, tol=TOLERANCE):
    """No-overlap, collapse, non-negativity and passthrough."""
    assert len(after) == len(before)
    original = by_id(before)
    assert set(original) == {w.id for w in after}

    for w in after:
        src = original[w.id]
        assert (w.x, w.width, w.id, w.hidden) == (src.x, src.width, src.id, src.hidden)
        assert w.y >= 0
        if w.hidden:
            assert abs(w.height) <= tol
        else:
            assert abs(w.height - src.height) <= tol

    visible = [w for w in after if not w.hidden]
    for i, a in enumerate(visible):
        for b in visible[i + 1:]:
            if x_overlap(a, b):
                assert a.y + a.height <= b.y + tol or b.y + b.height <= a.y + tol, (a, b)


def least_solution(widgets, collapse_spacing=True, measure_only_nearest_above=True):
    """Smallest y per widget satisfying every lower bound, computed top-down."""
    ordered = sorted(widgets, key=lambda w: (w.y, w.x))
    tops = []
    for i, w in enumerate(ordered):
        raw = [j for j in range(i) if x_overlap(w, ordered[j])]
        raw_sets = {j: {k for k in range(j) if x_overlap(ordered[j], ordered[k])} for j in raw}
        direct = [j for j in raw if not any(j in raw_sets[k] for k in raw if k != j)]
        if direct and measure_only_nearest_above:
            lowest = max(ordered[j].y + ordered[j].height for j in direct)
            direct = [j for j in direct if ordered[j].y + ordered[j].height == lowest]

        bounds = [0.0]
        if not direct:
            bounds.append(w.y)
        for j in direct:
            n = ordered[j]
            if n.hidden and collapse_spacing:
                gap = 0.0
            else:
                gap = max(w.y - (n.y + n.height), 0.0)
            height = 0.0 if n.hidden else n.height
            bounds.append(tops[j] + height + gap)
        for j in raw:
            if not ordered[j].hidden:
                bounds.append(tops[j] + ordered[j].height)
        tops.append(max(bounds))
    return {w.id: top for w, top in zip(ordered, tops)}


def random_widgets(seed, count=12):
    rng = random.Random(seed)
    widgets = []
    for i in range(count):
        widgets.append(Widget(
            id=f"w{i}",
            x=rng.randint(0, 200),
            y=rng.randint(0, 300),
            width=rng.randint(10, 120),
            height=rng.randint(5, 80),
            hidden=rng.random() < 0.3,
        ))
    return widgets
