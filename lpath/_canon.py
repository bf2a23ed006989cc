"""
Canonicalize and decompose paths.

All functions take the platform rules and `ByteSpan` values and return spans
(or lists of spans) that may alias the input buffers.
"""
from ._span import ByteBuilder, EMPTY, DOT_SPAN, DOUBLE_DOT, DOT, COLON


def split(rules, path):
    """Split on every separator; adjacent separators give empty components."""

    parts = []
    start = 0
    data = path.tobytes()
    for i, c in enumerate(data):
        if rules.is_separator(c):
            parts.append(path.sub(start, i - start))
            start = i + 1
    parts.append(path.sub(start))
    return parts


def elide(parts, keep_preceding=True):
    """
    Remove `.` and let every `..` cancel the nearest real component before it.

    Scans from the end. A `..` that has nothing left to cancel is kept at the
    front when `keep_preceding` is enabled, otherwise it is dropped.
    """

    kept = []
    cancel = 0
    for part in reversed(parts):
        if part.is_dot():
            continue
        if part.is_double_dot():
            cancel += 1
            continue
        if cancel:
            cancel -= 1
            continue
        kept.append(part)
    kept.reverse()

    if keep_preceding and cancel:
        kept[0:0] = [DOUBLE_DOT] * cancel
    return kept


def canon_split(rules, anchor, path, ignore_last_slash, ignore_preceding):
    """Strip the anchor (by length) and split the rest into canonical components."""

    if path.length < anchor.length:
        return []
    path = path.sub(anchor.length)

    if ignore_last_slash and rules.is_separator(path.last()):
        path = path.sub(0, path.length - 1)

    if not path:
        return []
    return elide(split(rules, path), not ignore_preceding)


def join(rules, prefix, parts):
    """Join components after the prefix with the output separator."""

    if not parts:
        return prefix

    builder = ByteBuilder()
    builder.append(prefix)
    for part in parts:
        builder.append(part)
        builder.append(rules.sep)
    builder.set_pos(builder.pos - 1)
    return builder.to_span()


def canon(rules, anchor, path):
    """Canonical form of `path` under `anchor`; `..` cannot climb above an anchor."""

    return join(rules, anchor, canon_split(rules, anchor, path, True, anchor.length > 0))


def canonicalize(rules, args):
    """
    Concatenate and canonicalize.

    A trailing separator (or a trailing `/.`) on the input is kept, unless the
    result already ends in a separator or in `..`.
    """

    cat = rules.concat(args)
    if cat.is_dot():
        return cat

    result = canon(rules, rules.anchor(args), cat)
    if not result:
        return DOT_SPAN

    if (
        (rules.is_separator(cat.last()) or (rules.is_separator(cat.last(1)) and cat.ends_with_dot())) and
        not rules.is_separator(result.last()) and
        not result.ends_with_dots()
    ):
        return result.add_sep(rules.sep)
    return result


def _split_anchored(rules, path):
    """Anchor (empty when relative) and canonical components of a concatenated path."""

    anchor = rules.anchor((path,)) if rules.is_absolute(path) else EMPTY
    return anchor, canon_split(rules, anchor, path, True, False)


def parent(rules, args):
    """Get the parent path."""

    path = rules.concat(args)
    absolute = rules.is_absolute(path)
    anchor, parts = _split_anchored(rules, path)

    if not parts:
        if absolute:
            # A bare drive has no root to stop at
            return anchor.cat(DOUBLE_DOT) if anchor.last() == COLON else anchor
        return DOUBLE_DOT

    last = parts.pop()
    if last.is_double_dot():
        if absolute:
            return anchor
        # Already above the start, so climb one more
        parts.append(last)
        parts.append(last)

    if not parts and not absolute:
        return DOT_SPAN

    return rules.fix_drive_case(join(rules, anchor, parts))


def name(rules, args):
    """Get the last component."""

    parts = _split_anchored(rules, rules.concat(args))[1]
    return parts[-1] if parts else EMPTY


def stem(rules, args):
    """Get the name without its last suffix."""

    value = name(rules, args)
    if rules.no_suffix(value):
        return value

    data = value.tobytes()
    # A leading dot is part of the stem
    for i in range(len(data) - 1, 0, -1):
        if data[i] == DOT:
            return value.sub(0, i)
    return value


def suffix(rules, args):
    """Get the last suffix, including its dot."""

    value = name(rules, args)
    if rules.no_suffix(value):
        return EMPTY

    data = value.tobytes()
    for i in range(len(data) - 1, 0, -1):
        c = data[i]
        if rules.breaks_suffix(c):
            return EMPTY
        if c == DOT:
            return value.sub(i)
    return EMPTY


def suffixes(rules, args):
    """Get all suffixes in order."""

    value = name(rules, args)
    if rules.no_suffix(value):
        return []

    found = []
    data = value.tobytes()
    end = len(data)
    for i in range(len(data) - 1, 0, -1):
        c = data[i]
        if rules.breaks_suffix(c):
            break
        if c == DOT:
            found.append(value.sub(i, end - i))
            end = i
    found.reverse()
    return found


def parts(rules, args):
    """Get the anchor (if any) followed by the canonical components."""

    path = rules.concat(args)
    anchor, components = _split_anchored(rules, path)
    if rules.is_absolute(path):
        components.insert(0, anchor)
    return components


def relative(rules, base, target):
    """
    Express the absolute `target` relative to the absolute `base`.

    Components are compared with the platform's case rule.
    """

    base_parts = canon_split(rules, rules.anchor((base,)), base, True, True)
    target_parts = canon_split(rules, rules.anchor((target,)), target, True, True)

    common = 0
    count = min(len(base_parts), len(target_parts))
    while common < count and base_parts[common].equals(target_parts[common], rules.case_sensitive):
        common += 1

    return join(rules, EMPTY, [DOUBLE_DOT] * (len(base_parts) - common) + target_parts[common:])
