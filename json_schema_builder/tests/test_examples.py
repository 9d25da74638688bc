"""
Builds the draft-04 example documents published on json-schema.org and
compares them with the reference files in test_data/examples.
"""

from __future__ import annotations

import json
from pathlib import Path

from json_schema_builder import SchemaNode

EXAMPLES_DIR = Path(__file__).parent / "test_data" / "examples"


def _typed(type_name: str) -> SchemaNode:
    node = SchemaNode()
    node.set_type(type_name)
    return node


def build_product_set() -> SchemaNode:
    """http://json-schema.org/example1.html"""
    id_ = SchemaNode()
    id_.set_description("The unique identifier for a product")
    id_.set_type("number")

    price = _typed("number")
    price.set_minimum(0, True)

    tags = _typed("array")
    tags.set_items(_typed("string"), True, 1)

    dimensions = _typed("object")
    dimensions.add_property("length", _typed("number"), True)
    dimensions.add_property("width", _typed("number"), True)
    dimensions.add_property("height", _typed("number"), True)

    warehouse_location = SchemaNode()
    warehouse_location.set_description("Coordinates of the warehouse with the product")
    warehouse_location.set_ref("http://json-schema.org/geo")

    product = SchemaNode()
    product.set_title("Product")
    product.set_type("object")
    product.add_property("id", id_, True)
    product.add_property("name", _typed("string"), True)
    product.add_property("price", price, True)
    product.add_property("tags", tags)
    product.add_property("dimensions", dimensions)
    product.add_property("warehouseLocation", warehouse_location)

    schema = SchemaNode(True)
    schema.set_title("Product set")
    schema.set_type("array")
    schema.set_items(product)
    return schema


def _enum(*values) -> SchemaNode:
    node = SchemaNode()
    node.set_enum(list(values))
    return node


def _patterned(pattern: str) -> SchemaNode:
    node = _typed("string")
    node.set_pattern(pattern)
    return node


def _closed(**properties: SchemaNode) -> SchemaNode:
    node = SchemaNode()
    for name, prop in properties.items():
        node.add_property(name, prop, True)
    node.set_additional_properties(False)
    return node


def build_fstab_entry() -> SchemaNode:
    """http://json-schema.org/example2.html"""
    storage = _typed("object")
    for name in ("diskDevice", "diskUUID", "nfs", "tmpfs"):
        ref = SchemaNode()
        ref.set_ref(f"#/definitions/{name}")
        storage.add_one_of(ref)

    options = _typed("array")
    options.set_items(_typed("string"), True, 1)

    # shared between diskDevice and diskUUID
    disk = _enum("disk")

    server = _typed("string")
    for format_name in ("host-name", "ipv4", "ipv6"):
        fmt = SchemaNode()
        fmt.set_format(format_name)
        server.add_one_of(fmt)

    size_in_mb = _typed("integer")
    size_in_mb.set_minimum(16)
    size_in_mb.set_maximum(512)

    schema = SchemaNode(True)
    schema.set_description("schema for an fstab entry")
    schema.set_type("object")
    schema.add_property("storage", storage, True)
    schema.add_property("fstype", _enum("ext3", "ext4", "btrfs"))
    schema.add_property("options", options)
    schema.add_property("readonly", _typed("boolean"))
    schema.add_definition("diskDevice", _closed(type=disk, device=_patterned("^/dev/[^/]+(/[^/]+)*$")))
    schema.add_definition(
        "diskUUID",
        _closed(
            type=disk,
            label=_patterned("^[a-fA-F0-9]{8}-[a-fA-F0-9]{4}-[a-fA-F0-9]{4}-[a-fA-F0-9]{4}-[a-fA-F0-9]{12}$"),
        ),
    )
    schema.add_definition("nfs", _closed(type=_enum("nfs"), remotePath=_patterned("^(/[^/]+)+$"), server=server))
    schema.add_definition("tmpfs", _closed(type=_enum("tmpfs"), sizeInMB=size_in_mb))
    return schema


def test_product_set_matches_reference_text():
    expected = (EXAMPLES_DIR / "example1.json").read_text().strip()
    assert build_product_set().to_json() == expected


def test_fstab_entry_matches_reference_document():
    with open(EXAMPLES_DIR / "example2.json") as f:
        expected = json.load(f)
    assert json.loads(build_fstab_entry().to_json()) == expected


def test_fstab_entry_keeps_slashes_unescaped():
    text = build_fstab_entry().to_json()
    assert '"^/dev/[^/]+(/[^/]+)*$"' in text
    assert '"$ref":"#/definitions/diskDevice"' in text
    assert "\\/" not in text


def test_fstab_entry_root_key_order():
    assert list(build_fstab_entry().to_dict()) == [
        "$schema",
        "description",
        "type",
        "properties",
        "required",
        "definitions",
    ]


def test_pretty_and_compact_agree():
    schema = build_fstab_entry()
    assert json.loads(schema.to_json(pretty=True)) == json.loads(schema.to_json())
