from rustgen import Bound, Enum, Scope, Variant


def test_empty_enum():
    scope = Scope()
    scope.new_enum("MyEnum")
    assert scope.to_string() == "enum MyEnum {\n}"


def test_enum_variants_of_every_shape():
    scope = Scope()
    e = scope.new_enum("MyEnum").set_vis("pub").push_derive("Debug")
    e.push_variant("VariantA")
    e.push_variant(Variant("VariantB").push_tuple_field("String").push_tuple_field("u8"))
    e.push_variant(Variant("VariantC").push_named_field("test", "String"))
    expected = (
        "#[derive(Debug)]\n"
        "pub enum MyEnum {\n"
        "    VariantA,\n"
        "    VariantB(String, u8),\n"
        "    VariantC {\n"
        "        test: String,\n"
        "    },\n"
        "}"
    )
    assert scope.to_string() == expected


def test_variant_annotations():
    e = Enum("E").push_variant(Variant("A").push_annotation('#[serde(rename = "a")]'))
    assert Scope().push_enum(e).to_string() == 'enum E {\n    #[serde(rename = "a")]\n    A,\n}'


def test_generic_enum_with_bounds():
    e = Enum("E").push_generic("T").push_bound(Bound("T", ["Clone"]))
    e.push_variant(Variant("A").push_tuple_field("T"))
    assert Scope().push_enum(e).to_string() == "enum E<T>\nwhere T: Clone,\n{\n    A(T),\n}"


def test_enum_repr():
    e = Enum("Code").set_repr("u8").push_variant("Ok").push_variant("Err")
    assert Scope().push_enum(e).to_string() == "#[repr(u8)]\nenum Code {\n    Ok,\n    Err,\n}"
