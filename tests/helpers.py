"""Shared test helpers."""

import itertools


def fixed_bytes(*chunks: bytes):
    """Random source that replays the given chunks, then repeats the last one."""
    source = itertools.chain(chunks, itertools.repeat(chunks[-1]))
    return lambda n: next(source)
