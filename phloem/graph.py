"""Reading order and the "directly above" relation between widgets.

Everything here works on indices into the reading-ordered widget list,
so the relation is a list of index sets: above[i] holds the widgets that
precede widget i and share part of its horizontal extent.
"""

def reading_order(widgets):
    # sorted() is stable, ties beyond (y, x) keep their input order.
    return sorted(widgets, key=lambda w: (w.y, w.x))

def overlaps_x(a, b):
    return a.x < b.right and a.right > b.x

def overlaps_y(a, b):
    return a.y < b.bottom and a.bottom > b.y

def overlaps(a, b):
    return overlaps_x(a, b) and overlaps_y(a, b)

def above_sets(ordered):
    above = []
    for i, widget in enumerate(ordered):
        above.append({j for j in range(i) if overlaps_x(widget, ordered[j])})
    return above

def direct_above(above):
    """Drops every candidate that is shadowed by another candidate.

    Candidate j is shadowed for widget i when some other candidate k of i
    has j in its own above set, i.e. k sits between j and i.
    """
    direct = []
    for candidates in above:
        shadowed = set()
        for k in candidates:
            shadowed |= above[k] & candidates
        direct.append(candidates - shadowed)
    return direct

def blockers(ordered, above):
    """Visible widgets that widget i must stay below.

    Every visible j in above[i] bounds the top of i. The pair is left out
    when a visible k between them has j above it as well: stacking i below
    k and k below j already keeps i below j, as heights are never negative.
    """
    visible = [{j for j in candidates if not ordered[j].hidden} for candidates in above]
    return direct_above(visible)

def nearest_above(ordered, neighbors):
    if not neighbors:
        return set()
    lowest = max(ordered[j].bottom for j in neighbors)
    return {j for j in neighbors if ordered[j].bottom == lowest}

def collisions(widgets):
    visible = [w for w in widgets if not w.hidden]
    pairs = []
    for i, a in enumerate(visible):
        for b in visible[i+1:]:
            if overlaps(a, b):
                pairs.append((a, b))
    return pairs
