import pytest

from lspkit.any import Any
from lspkit.text_document import (
    CodeLens,
    ContentChangeEvent,
    DidChangeParams,
    DocumentLink,
    FoldingRange,
    LinkedEditingRanges,
    PublishDiagnosticsParams,
    ReferenceParams,
    SelectionRange,
    TypeHierarchyDirection,
    TypeHierarchyItem,
    TypeHierarchyParams,
    direction_from_json,
)
from lspkit.types import Position, Range, TextDocumentIdentifier

URI = "file:///tmp/sample.cpp"


def _range(a, b, c, d):
    return Range(Position(a, b), Position(c, d))


def test_code_lens_round_trip():
    lens = CodeLens(_range(1, 0, 1, 5), {"title": "run", "command": "x"}, Any.from_json({"k": 1}))
    back = CodeLens.from_json(lens.to_json())
    assert back == lens
    assert back.data.get() == {"k": 1}


def test_code_lens_minimal_omits_optionals():
    assert set(CodeLens(_range(0, 0, 0, 1)).to_json()) == {"range"}


def test_code_lens_requires_range():
    with pytest.raises(ValueError):
        CodeLens.from_json({"command": {}})


def test_content_change_full_text():
    change = ContentChangeEvent.from_json({"text": "abc"})
    assert change.range is None
    assert change.text == "abc"
    assert change.to_json() == {"text": "abc"}


def test_content_change_round_trip():
    change = ContentChangeEvent("x", _range(2, 1, 2, 3), 2)
    assert ContentChangeEvent.from_json(change.to_json()) == change


def test_did_change_round_trip():
    params = DidChangeParams(
        {"uri": URI, "version": 3},
        [ContentChangeEvent("a"), ContentChangeEvent("b", _range(0, 0, 0, 1))],
        URI,
    )
    assert DidChangeParams.from_json(params.to_json()) == params


def test_did_change_requires_content_changes():
    with pytest.raises(ValueError):
        DidChangeParams.from_json({"textDocument": {"uri": URI}})


def test_document_link_round_trip():
    link = DocumentLink(_range(0, 0, 0, 4), URI)
    assert DocumentLink.from_json(link.to_json()) == link
    assert "data" not in link.to_json()


def test_folding_range_wire_names():
    fold = FoldingRange(1, 4, 0, 2, "comment")
    data = fold.to_json()
    assert set(data) == {"startLine", "endLine", "startCharacter", "endCharacter", "kind"}
    assert FoldingRange.from_json(data) == fold


def test_folding_range_defaults_when_missing():
    fold = FoldingRange.from_json({"startLine": 2, "endLine": 5})
    assert (fold.start_character, fold.end_character, fold.kind) == (0, 0, "")


def test_folding_range_rejects_bad_line():
    with pytest.raises(ValueError):
        FoldingRange.from_json({"startLine": "2", "endLine": 5})


def test_linked_editing_ranges_round_trip():
    ranges = LinkedEditingRanges([_range(0, 0, 0, 3), _range(4, 0, 4, 3)], "[a-z]+")
    assert LinkedEditingRanges.from_json(ranges.to_json()) == ranges


def test_publish_diagnostics_round_trip():
    params = PublishDiagnosticsParams(URI, [{"message": "bad", "range": _range(0, 0, 0, 1).to_json()}])
    assert PublishDiagnosticsParams.from_json(params.to_json()) == params


def test_publish_diagnostics_rejects_non_object_item():
    with pytest.raises(ValueError):
        PublishDiagnosticsParams.from_json({"uri": URI, "diagnostics": [1]})


def test_reference_params_context():
    params = ReferenceParams(TextDocumentIdentifier(URI), Position(3, 4), True)
    data = params.to_json()
    assert data["context"] == {"includeDeclaration": True}
    assert ReferenceParams.from_json(data) == params


def test_reference_params_requires_context():
    with pytest.raises(ValueError):
        ReferenceParams.from_json({"textDocument": {"uri": URI}, "position": {"line": 0, "character": 0}})


def test_selection_range_nested_round_trip():
    outer = SelectionRange(_range(0, 0, 10, 0))
    inner = SelectionRange(_range(1, 0, 2, 0), outer)
    data = inner.to_json()
    assert data["parent"] == outer.to_json()
    assert "parent" not in data["parent"]
    assert SelectionRange.from_json(data) == inner


def test_direction_values():
    assert direction_from_json(2) is TypeHierarchyDirection.Both
    with pytest.raises(ValueError):
        direction_from_json(7)


def test_type_hierarchy_params_round_trip():
    params = TypeHierarchyParams(
        TextDocumentIdentifier(URI), Position(1, 2), 1, TypeHierarchyDirection.Parents
    )
    data = params.to_json()
    assert data["direction"] == 1
    assert TypeHierarchyParams.from_json(data) == params


def test_type_hierarchy_item_recursive_round_trip():
    parent = TypeHierarchyItem("Base", 5, URI, _range(0, 0, 5, 0), _range(0, 6, 0, 10))
    item = TypeHierarchyItem(
        "Derived",
        5,
        URI,
        _range(6, 0, 9, 0),
        _range(6, 6, 6, 13),
        detail="class Derived",
        parents=[parent],
        children=[],
        data=Any.from_json([1, 2]),
    )
    data = item.to_json()
    assert data["selectionRange"] == item.selection_range.to_json()
    assert "children" in data and data["children"] == []
    back = TypeHierarchyItem.from_json(data)
    assert back == item
    assert back.parents[0].parents is None


def test_type_hierarchy_item_requires_name():
    with pytest.raises(ValueError):
        TypeHierarchyItem.from_json({"kind": 5, "uri": URI})