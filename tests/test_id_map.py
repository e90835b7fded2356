from graphexport.id_map import IDMap


def test_resolve_is_idempotent():
    ids = IDMap("n")
    first = ids.resolve("http://example.org/a")
    second = ids.resolve("http://example.org/a")

    assert first == second == "n1"
    assert len(ids) == 1


def test_labels_follow_first_seen_order():
    ids = IDMap("e")
    identifiers = ["zeta", "alpha", "mu", "alpha", "zeta", "omega"]
    labels = [ids.resolve(i) for i in identifiers]

    assert labels == ["e1", "e2", "e3", "e2", "e1", "e4"]
    # Distinct identifiers never share a label
    assert len(set(ids.resolve(i) for i in set(identifiers))) == len(ids) == 4


def test_default_base_is_empty_and_empty_identifier_is_valid():
    ids = IDMap()
    assert ids.resolve("") == "1"
    assert ids.resolve("x") == "2"
    assert ids.resolve("") == "1"


def test_contains_does_not_assign():
    ids = IDMap("n")
    assert "a" not in ids
    assert len(ids) == 0

    ids.resolve("a")
    assert "a" in ids
    assert "b" not in ids
    assert len(ids) == 1


def test_items_in_assignment_order():
    ids = IDMap("n")
    for identifier in ["b", "a", "c"]:
        ids.resolve(identifier)

    assert list(ids.items()) == [("b", "n1"), ("a", "n2"), ("c", "n3")]


def test_instances_are_independent():
    nodes = IDMap("n")
    edges = IDMap("e")
    nodes.resolve("x")
    nodes.resolve("y")

    assert edges.resolve("x") == "e1"
    assert nodes.resolve("x") == "n1"
