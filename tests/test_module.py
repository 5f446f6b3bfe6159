from rustgen import Lint, Scope


def test_empty_module():
    scope = Scope()
    scope.new_module("foo")
    assert scope.to_string() == "mod foo {\n}"


def test_module_with_imports():
    scope = Scope()
    m = scope.new_module("foo")
    m.push_import("bar", "Bar")
    m.push_import("baz", "Baz")
    assert scope.to_string() == "mod foo {\n    use bar::Bar;\n    use baz::Baz;\n\n}"


def test_module_scoped_imports():
    scope = Scope()
    m = scope.new_module("foo")
    m.push_import("bar", "Bar")
    m.push_import("bar", "baz::Baz")
    m.push_import("bar::quux", "quuux::Quuuux")
    assert m.imports["bar"]["baz"].line == "bar::baz"
    assert scope.to_string() == "mod foo {\n    use bar::{Bar, baz};\n    use bar::quux::quuux;\n\n}"


def test_nested_modules():
    scope = Scope()
    scope.new_module("a").set_vis("pub").new_module("b").new_struct("S")
    assert scope.to_string() == "pub mod a {\n    mod b {\n        struct S;\n    }\n}"


def test_test_module_layout():
    scope = Scope()
    m = scope.new_module("tests").set_doc("Tests.").push_attribute("cfg(test)")
    m.push_import("super", "*")
    m.new_function("it_works").push_attribute("test").push_line("assert!(true);")
    expected = (
        "/// Tests.\n"
        "#[cfg(test)]\n"
        "mod tests {\n"
        "    use super::*;\n"
        "\n"
        "    #[test]\n"
        "    fn it_works() {\n"
        "        assert!(true);\n"
        "    }\n"
        "}"
    )
    assert scope.to_string() == expected


def test_module_lints_and_raw_lines():
    scope = Scope()
    m = scope.new_module("m").push_lint(Lint.deny("warnings"))
    m.raw("const A: u8 = 1;\nconst B: u8 = 2;")
    assert scope.to_string() == "#[deny(warnings)]\nmod m {\n    const A: u8 = 1;\n    const B: u8 = 2;\n}"
