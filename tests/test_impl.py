import pytest

from rustgen import AssociatedConst, AssociatedType, Bound, Impl, Scope, Type


def test_empty_impl():
    scope = Scope()
    scope.new_impl("Foo")
    assert scope.to_string() == "impl Foo {\n}"


def test_impl_with_two_functions():
    impl = Impl("MyStruct")
    impl.new_function("one").push_line("1")
    impl.new_function("two").push_line("2")
    expected = (
        "impl MyStruct {\n"
        "    fn one() {\n"
        "        1\n"
        "    }\n"
        "\n"
        "    fn two() {\n"
        "        2\n"
        "    }\n"
        "}"
    )
    assert Scope().push_impl(impl).to_string() == expected


def test_trait_impl_with_associated_items():
    impl = (
        Impl(Type("Wrapper", ["T"]))
        .push_generic("T")
        .set_impl_trait(Type("From", ["T"]))
        .push_bound(Bound("T", ["Clone"]))
        .push_associated_const(AssociatedConst("N", "usize", concrete_value="1"))
        .push_associated_type(AssociatedType("Out").set_concrete_ty("Vec", ["T"]))
    )
    impl.new_function("from").push_arg("value", "T").set_ret("Self").push_line("Wrapper(value)")
    expected = (
        "impl<T> From<T> for Wrapper<T>\n"
        "where T: Clone,\n"
        "{\n"
        "    const N: usize = 1;\n"
        "    type Out = Vec<T>;\n"
        "\n"
        "    fn from(value: T) -> Self {\n"
        "        Wrapper(value)\n"
        "    }\n"
        "}"
    )
    assert Scope().push_impl(impl).to_string() == expected


def test_const_only_impl_separates_functions():
    impl = Impl("Foo").push_associated_const(
        AssociatedConst("MAX", "u8").set_concrete_value("255").set_concrete_vis("pub")
    )
    impl.new_function("max").set_ret("u8").push_line("Self::MAX")
    expected = (
        "impl Foo {\n"
        "    pub const MAX: u8 = 255;\n"
        "\n"
        "    fn max() -> u8 {\n"
        "        Self::MAX\n"
        "    }\n"
        "}"
    )
    assert Scope().push_impl(impl).to_string() == expected


def test_impl_macros():
    impl = Impl("Foo").push_macro("#[async_trait]")
    assert Scope().push_impl(impl).to_string() == "#[async_trait]\nimpl Foo {\n}"


def test_function_without_body():
    impl = Impl("Foo")
    impl.new_function("f")
    with pytest.raises(ValueError, match="impl blocks must define fn bodies"):
        Scope().push_impl(impl).to_string()


def test_associated_const_without_value():
    impl = Impl("Foo").push_associated_const(AssociatedConst("N", "usize"))
    with pytest.raises(ValueError, match="Associated consts must have a concrete value in impl blocks: N"):
        Scope().push_impl(impl).to_string()


def test_associated_type_without_concrete_type():
    impl = Impl("Foo").push_associated_type(AssociatedType("Out"))
    with pytest.raises(ValueError, match="Associated types must have a concrete type in impl blocks: Out"):
        Scope().push_impl(impl).to_string()
