from types import SimpleNamespace

import pytest

from quotations.graph import CommodityGraph


def line(pk, relationship_type="separate", related_item_id=None, line_number=None):
    return SimpleNamespace(
        pk=pk,
        quotation_id=1,
        line_number=line_number or pk,
        category="car",
        relationship_type=relationship_type,
        related_item_id=related_item_id,
    )


@pytest.fixture
def stacked():
    """Line 2 and 3 are loaded onto line 1, line 4 onto line 3, line 5 is
    coupled to line 1 and line 6 stands alone."""
    return CommodityGraph(
        [
            line(1),
            line(2, "loaded_with", 1),
            line(3, "loaded_with", 1),
            line(4, "loaded_with", 3),
            line(5, "connected", 1),
            line(6),
        ],
    )


def test_stack_membership(stacked):
    base = stacked.get(1)

    assert stacked.is_stack_base(base)
    assert stacked.is_loaded_with(base)
    assert [m.pk for m in stacked.get_stack_members(base)] == [1, 2, 3, 4]
    assert {stacked.get_stack_group(stacked.get(pk)) for pk in (1, 2, 3, 4)} == {1}
    assert not stacked.is_stack_base(stacked.get(3))


def test_connected_lines_are_not_stacked(stacked):
    coupled = stacked.get(5)

    assert stacked.is_connected(coupled)
    assert not stacked.is_in_stack(coupled)
    assert stacked.get_stack_group(coupled) is None
    assert stacked.related(coupled) is stacked.get(1)


def test_separate_lines(stacked):
    assert stacked.is_separate(stacked.get(6))
    assert not stacked.is_in_stack(stacked.get(6))
    assert stacked.get_stack_members(stacked.get(6)) == []
    assert not stacked.is_separate(stacked.get(2))


def test_stacks(stacked):
    assert {base: [m.pk for m in members] for base, members in stacked.stacks().items()} == {
        1: [1, 2, 3, 4],
    }


def test_stack_members_are_in_line_order():
    graph = CommodityGraph(
        [
            line(10, line_number=3),
            line(11, "loaded_with", 10, line_number=1),
            line(12, "loaded_with", 10, line_number=2),
        ],
    )

    assert [m.pk for m in graph.get_stack_members(graph.get(10))] == [11, 12, 10]


def test_relationship_synonyms_are_understood():
    graph = CommodityGraph([line(1), line(2, "Stacked", 1), line(3, "towed", 1)])

    assert graph.is_in_stack(graph.get(2))
    assert graph.is_connected(graph.get(3))


def test_relations_outside_the_quotation_are_dangling():
    graph = CommodityGraph(
        [line(1), line(2, "loaded_with", 99), line(3, "connected", 98)],
    )

    assert graph.dangling == [2, 3]
    assert graph.related(graph.get(2)) is None
    assert not graph.is_in_stack(graph.get(2))
    assert graph.stacks() == {}


def test_self_stacking_line_is_a_cycle():
    graph = CommodityGraph([line(1, "loaded_with", 1)])

    assert graph.cycles == [[1]]
    assert not graph.is_in_stack(graph.get(1))


def test_stacking_cycles_are_reported_once_and_not_stacked():
    graph = CommodityGraph(
        [
            line(1, "loaded_with", 2),
            line(2, "loaded_with", 3),
            line(3, "loaded_with", 1),
            line(4, "loaded_with", 1),
            line(5),
            line(6, "loaded_with", 5),
        ],
    )

    assert len(graph.cycles) == 1
    assert set(graph.cycles[0]) == {1, 2, 3}
    assert all(graph.get_stack_group(graph.get(pk)) is None for pk in (1, 2, 3, 4))
    assert graph.get_stack_group(graph.get(6)) == 5


def test_chain_follows_relations_until_the_end():
    graph = CommodityGraph(
        [
            line(1),
            line(2, "loaded_with", 1),
            line(3, "connected", 2),
            line(4, "connected", 77),
        ],
    )

    assert [(a.pk, b.pk) for a, b in graph.chain(graph.get(3))] == [(3, 2), (2, 1)]
    assert [(a.pk, b) for a, b in graph.chain(graph.get(4))] == [(4, None)]
    assert graph.chain(graph.get(1)) == []


def test_chain_stops_on_a_cycle():
    graph = CommodityGraph([line(1, "connected", 2), line(2, "connected", 1)])

    assert [(a.pk, b.pk) for a, b in graph.chain(graph.get(1))] == [(1, 2), (2, 1)]
