"""解析入口测试：单对象、列表、多文档流与目录。"""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from _models import Address, Person
from yamlet import (
    DuplicateKeyError,
    StructuralIndentationError,
    YamlParser,
    iter_trees,
    load_tree,
)
from yamlet.bridge import FactoryRegistry, FunctionFactory, ModelFactory
from yamlet.settings import Settings


@pytest.fixture
def people() -> YamlParser[Person]:
    return YamlParser(ModelFactory(Person), Settings())


def test_parse_object_single_mapping(people: YamlParser[Person]):
    person = people.parse_object("name: Ann\nage: 30")
    assert person == Person(name="Ann", age=30)


def test_parse_object_generic_keeps_text():
    parser = YamlParser.generic(Settings())
    assert parser.parse_object("name: Ann\nage: 30\n\n") == {"name": "Ann", "age": "30"}


def test_parse_list_of_inline_items(people: YamlParser[Person]):
    got = people.parse_list("- name: Ann\n  age: 30\n- name: Bob\n  age: 25")
    assert [p.name for p in got] == ["Ann", "Bob"]
    assert [p.age for p in got] == [30, 25]


def test_parse_list_nested(people: YamlParser[Person]):
    text = "-\n  -\n    name: A\n  -\n    name: B\n-\n  name: C\n"
    got = people.parse_list(text)
    assert [[p.name for p in got[0]], got[1].name] == [["A", "B"], "C"]


def test_duplicate_key_names_type(people: YamlParser[Person]):
    with pytest.raises(DuplicateKeyError) as ei:
        people.parse_object("name: Ann\nname: Bob")
    assert ei.value.key == "name"
    assert ei.value.type_name == "Person"


def test_indentation_error(people: YamlParser[Person]):
    with pytest.raises(StructuralIndentationError):
        people.parse_object(" name: Ann\nage: 30")


def test_nested_object_and_scalar_list(people: YamlParser[Person]):
    text = "name: Ann\naddress:\n  city: Lisbon\n  zip: 1000\ntags:\n  - a\n  - b\n"
    person = people.parse_object(text)
    assert person.address == Address(city="Lisbon", zip="1000")
    assert person.tags == ["a", "b"]


def test_parse_object_from_path_and_file_object(people: YamlParser[Person], write_yaml):
    path = write_yaml("ann.yaml", "name: Ann\n")
    assert people.parse_object(path).name == "Ann"
    with path.open("r", encoding="utf-8") as handle:
        assert people.parse_object(handle).name == "Ann"
    assert people.parse_object(io.StringIO("name: Bob\n")).name == "Bob"


def test_parse_sequence_lazy(people: YamlParser[Person], write_yaml):
    path = write_yaml(
        "many.yaml",
        """
        -
          name: Ann
        -
          name: Bob
        -
          name: Cid
        """,
    )
    seq = people.parse_sequence(path)
    assert next(seq).name == "Ann"
    seq.close()
    assert [p.name for p in people.parse_sequence(path)] == ["Ann", "Bob", "Cid"]


def test_parse_sequence_scalar_document():
    parser = YamlParser(FunctionFactory("Name", lambda f: f[""]), Settings())
    assert list(parser.parse_sequence("- Ann\n- Bob")) == ["Ann", "Bob"]


def test_parse_sequence_empty(people: YamlParser[Person]):
    assert list(people.parse_sequence("")) == []


def test_folder_sorted_by_name(people: YamlParser[Person], tmp_path: Path, write_yaml):
    write_yaml("b.yaml", "name: Bob\n")
    write_yaml("a.yaml", "name: Ann\n")
    write_yaml("c.txt", "name: Cid\n")
    (tmp_path / "d.yaml").mkdir()
    assert [p.name for p in people.parse_folder_eager(tmp_path)] == ["Ann", "Bob"]
    assert [p.name for p in people.parse_folder_lazy(str(tmp_path))] == ["Ann", "Bob"]


def test_folder_missing_is_empty(people: YamlParser[Person], tmp_path: Path):
    assert people.parse_folder_eager(tmp_path / "nope") == []


def test_folder_fails_on_bad_file(people: YamlParser[Person], tmp_path: Path, write_yaml):
    """目录解析不做恢复：任一文件出错即中止。"""

    write_yaml("a.yaml", "name: Ann\n")
    write_yaml("b.yaml", "name: Bob\nname: Bob\n")
    lazy = people.parse_folder_lazy(tmp_path)
    assert next(lazy).name == "Ann"
    with pytest.raises(DuplicateKeyError):
        next(lazy)
    with pytest.raises(DuplicateKeyError):
        people.parse_folder_eager(tmp_path)


def test_folder_extension_from_settings(tmp_path: Path, write_yaml):
    write_yaml("a.yml", "name: Ann\n")
    write_yaml("b.yaml", "name: Bob\n")
    parser = YamlParser(ModelFactory(Person), Settings(extension=".yml"))
    assert [p.name for p in parser.parse_folder_eager(tmp_path)] == ["Ann"]


def test_for_type_uses_registry():
    registry = FactoryRegistry()
    registry.register(tuple, FunctionFactory("pair", lambda f: (f["a"], f["b"])))
    parser = YamlParser.for_type(tuple, registry, Settings())
    assert parser.type_name == "pair"
    assert parser.parse_object("a: 1\nb: 2") == ("1", "2")
    assert YamlParser.for_type(Person, registry, Settings()).type_name == "Person"


def test_load_tree_and_iter_trees():
    assert load_tree("a:\n  b: 1") == {"a": {"b": "1"}}
    assert list(iter_trees("-\n  a: 1\n-\n  a: 2")) == [{"a": "1"}, {"a": "2"}]
