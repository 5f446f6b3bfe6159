from rustgen import AssociatedConst, AssociatedType, Impl, Module, Scope, validate_scope


def test_valid_scope() -> None:
    scope = Scope()
    scope.new_function("main").push_line("run();")
    t = scope.new_trait("T")
    t.new_function("f")
    res = validate_scope(scope)
    assert res.ok, res.errors
    assert res.errors == []


def test_collects_every_problem() -> None:
    scope = Scope()
    scope.new_function("no_body")
    scope.new_trait("T").new_function("f").set_vis("pub")
    impl = Impl("Foo").push_associated_const(AssociatedConst("N", "u8"))
    impl.push_associated_type(AssociatedType("Out"))
    scope.push_impl(impl)
    scope.new_module("m")
    scope.items.append(Module("m"))  # bypasses the duplicate check on push
    res = validate_scope(scope)
    assert not res.ok
    assert len(res.errors) == 5
    assert "crate: function `no_body` has no body" in res.errors
    assert "crate: module `m` is defined more than once" in res.errors


def test_nested_module_paths() -> None:
    scope = Scope()
    scope.new_module("a").new_module("b").new_impl("X").new_function("f")
    res = validate_scope(scope)
    assert res.errors == ["crate::a::b::X: function `f` has no body"]
