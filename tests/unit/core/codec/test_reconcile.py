"""Tests for identity reconciliation across reparses."""

from __future__ import annotations

from helpers.samples import sample_block

from filterkit.core.codec import CounterIdentityFactory, parse, reconcile_identities


def _parse(text: str, prefix: str):
    return parse(text, new_id=CounterIdentityFactory(prefix=prefix))


class TestReconcileIdentities:
    def test_unchanged_block_keeps_identity(self):
        previous = _parse(sample_block("X", 10) + sample_block("Y", 20), "old-")
        edited = _parse(sample_block("X", 10) + sample_block("Y", 99), "new-")

        reconcile_identities(previous, edited)

        assert edited[0].id == "old-1"
        assert edited[1].id == "new-2"

    def test_duplicates_are_assigned_in_order(self):
        text = sample_block("Z", 5) * 2
        previous = _parse(text, "old-")
        rebuilt = _parse(text, "new-")

        reconcile_identities(previous, rebuilt)

        assert [b.id for b in rebuilt] == ["old-1", "old-2"]

    def test_removed_duplicate_gives_first_identity_to_survivor(self):
        previous = _parse(sample_block("Z", 5) * 2, "old-")
        rebuilt = _parse(sample_block("Z", 5), "new-")

        reconcile_identities(previous, rebuilt)

        assert [b.id for b in rebuilt] == ["old-1"]

    def test_reordered_blocks_follow_their_content(self):
        previous = _parse(sample_block("A", 1) + sample_block("B", 2), "old-")
        rebuilt = _parse(sample_block("B", 2) + sample_block("A", 1), "new-")

        reconcile_identities(previous, rebuilt)

        assert [b.id for b in rebuilt] == ["old-2", "old-1"]

    def test_header_change_breaks_the_match(self):
        previous = _parse(sample_block("A", 1), "old-")
        rebuilt = _parse(sample_block("Renamed", 1), "new-")

        reconcile_identities(previous, rebuilt)

        assert rebuilt[0].id == "new-1"

    def test_returns_same_list_and_touches_only_ids(self):
        previous = _parse(sample_block("A", 1), "old-")
        rebuilt = _parse(sample_block("A", 1), "new-")
        before = [b.to_dict(include_id=False) for b in rebuilt]

        result = reconcile_identities(previous, rebuilt)

        assert result is rebuilt
        assert [b.to_dict(include_id=False) for b in rebuilt] == before

    def test_empty_previous_keeps_fresh_ids(self):
        rebuilt = _parse(sample_block("A", 1), "new-")
        reconcile_identities([], rebuilt)
        assert rebuilt[0].id == "new-1"


class TestCounterIdentityFactory:
    def test_sequence(self):
        factory = CounterIdentityFactory(prefix="b", start=7)
        assert [factory(), factory()] == ["b7", "b8"]
