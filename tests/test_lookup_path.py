import re

import pytest

from mropath.api.lookup_path import LookupPath
from mropath.models import Category, DisplayOptions, ModuleRef
from mropath.rendering import StyleTable


class _StubModel:
    def __init__(self):
        # Mirrors the collaborator queries the lookup path makes.
        self.orders: dict[int, list[ModuleRef]] = {}
        self.methods: dict[ModuleRef, dict[Category, list[str]]] = {}

    def set_order(self, subject, modules):
        self.orders[id(subject)] = modules

    def stub_methods(self, module, public, protected, private, undefined):
        self.methods[module] = {
            Category.PUBLIC: public,
            Category.PROTECTED: protected,
            Category.PRIVATE: private,
            Category.UNDEFINED: undefined,
        }

    def resolution_order(self, subject):
        return self.orders[id(subject)]

    def classify(self, module, category):
        return self.methods.get(module, {}).get(category, [])

    def display_name(self, module):
        return module.name

    def singleton_owner(self, module):
        return module.owner


C = ModuleRef("C")
D = ModuleRef("D")
M = ModuleRef("M")


def _path(subject, model, styles=None, **flags) -> LookupPath:
    return LookupPath(subject, DisplayOptions(**flags), model=model, styles=styles or StyleTable())


@pytest.fixture
def model():
    return _StubModel()


def test_entries_contain_one_entry_per_module_in_order(model):
    subject = object()
    model.set_order(subject, [C, D])

    path = _path(subject, model, public=True)
    assert [entry.module_name for entry in path.entries] == ["C", "D"]
    assert [entry.module for entry in path.entries] == [C, D]


def test_grep_with_regex_keeps_matching_methods(model):
    subject = object()
    model.set_order(subject, [C, D])
    model.stub_methods(C, ["axbyc", "xy"], [], [], [])
    model.stub_methods(D, ["axbyc", "xdy"], [], [], [])

    path = _path(subject, model, public=True, overridden=True).grep(re.compile(r"x.y"))
    assert path.module_names() == ["C", "D"]
    assert set(path.entries[0].methods) == {"axbyc"}
    assert set(path.entries[1].methods) == {"axbyc", "xdy"}
    assert path.entries[1].is_overridden("axbyc")
    assert not path.entries[1].is_overridden("xdy")


def test_grep_with_string_keeps_methods_containing_it(model):
    subject = object()
    model.set_order(subject, [C, D])
    model.stub_methods(C, ["axxa", "axa"], [], [], [])
    model.stub_methods(D, ["bxxb", "axxa"], [], [], [])

    path = _path(subject, model, public=True, overridden=True).grep("xx")
    assert path.module_names() == ["C", "D"]
    assert set(path.entries[0].methods) == {"axxa"}
    assert set(path.entries[1].methods) == {"axxa", "bxxb"}


def test_grep_is_idempotent_and_leaves_receiver_untouched(model):
    subject = object()
    model.set_order(subject, [C, D])
    model.stub_methods(C, ["save", "load"], ["_save_now"], [], [])
    model.stub_methods(D, ["save", "close"], [], [], [])

    path = _path(subject, model, public=True, protected=True, overridden=True)
    once = path.grep("save")
    assert once.grep("save").entries == once.entries
    assert once.options == path.options
    assert once.subject is subject
    assert set(path.entries[0].methods) == {"save", "load", "_save_now"}


def test_grep_rederives_overridden_flags_from_filtered_names(model):
    subject = object()
    model.set_order(subject, [C, D])
    model.stub_methods(C, ["run"], [], [], [])
    model.stub_methods(D, ["run", "runner"], [], [], [])

    path = _path(subject, model, public=True).grep("runner")
    assert set(path.entries[0].methods) == set()
    assert set(path.entries[1].methods) == {"runner"}
    assert not path.entries[1].is_overridden("runner")


def test_later_occurrence_is_overridden_across_categories(model):
    subject = object()
    model.set_order(subject, [C, D, M])
    model.stub_methods(C, ["x"], [], [], [])
    model.stub_methods(D, [], [], ["x"], [])
    model.stub_methods(M, [], [], [], ["x"])

    path = _path(subject, model, public=True, private=True, undefined=True, overridden=True)
    assert not path.entries[0].is_overridden("x")
    assert path.entries[1].category_of("x") == Category.PRIVATE
    assert path.entries[1].is_overridden("x")
    assert path.entries[2].category_of("x") == Category.UNDEFINED
    assert path.entries[2].is_overridden("x")


def test_hidden_overridden_names_still_shadow_later_modules(model):
    subject = object()
    model.set_order(subject, [C, D, M])
    model.stub_methods(C, ["a"], [], [], [])
    model.stub_methods(D, ["a", "b"], [], [], [])
    model.stub_methods(M, ["b", "c"], [], [], [])

    path = _path(subject, model, public=True)
    assert set(path.entries[0].methods) == {"a"}
    assert set(path.entries[1].methods) == {"b"}
    assert set(path.entries[2].methods) == {"c"}


def test_owner_of_returns_first_defining_entry(model):
    subject = object()
    model.set_order(subject, [C, D])
    model.stub_methods(C, ["a"], [], [], [])
    model.stub_methods(D, ["a", "b"], [], [], [])

    path = _path(subject, model, public=True)
    assert path.owner_of("a").module_name == "C"
    assert path.owner_of("b").module_name == "D"
    assert path.owner_of("missing") is None


def test_empty_resolution_order_renders_empty_string(model):
    subject = object()
    model.set_order(subject, [])

    path = _path(subject, model, public=True)
    assert path.entries == ()
    assert path.render() == ""


def test_all_categories_disabled_renders_module_names_only(model):
    subject = object()
    model.set_order(subject, [C, M])
    model.stub_methods(C, ["public1"], ["protected1"], [], [])

    assert _path(subject, model).render() == "C\nM"


def test_collaborator_errors_propagate(model):
    class _BrokenModel(_StubModel):
        def resolution_order(self, subject):
            raise RuntimeError("broken object")

    with pytest.raises(RuntimeError, match="broken object"):
        _path(object(), _BrokenModel(), public=True)


def test_flags_override_given_options(model):
    subject = object()
    model.set_order(subject, [C])

    path = LookupPath(subject, DisplayOptions(public=True), model=model, styles=StyleTable(), private=True)
    assert path.options == DisplayOptions(public=True, private=True)


def test_defaults_come_from_settings(model, monkeypatch):
    monkeypatch.setenv("MROPATH_OPTIONS", "private")
    monkeypatch.setenv("MROPATH_COLOR", "never")
    subject = object()
    model.set_order(subject, [C])
    model.stub_methods(C, ["public1"], [], ["private1"], [])

    path = LookupPath(subject, model=model)
    assert path.options == DisplayOptions(private=True)
    assert path.render() == "C\n  private1"


class TestRenderContents:
    @pytest.fixture
    def subject(self, model):
        subject = object()
        model.set_order(subject, [C, M])
        for module in (C, M):
            model.stub_methods(
                module,
                ["public1", "public2"],
                ["protected1", "protected2"],
                ["private1", "private2"],
                ["undefined1", "undefined2"],
            )
        return subject

    @pytest.mark.parametrize("category", ["public", "protected", "private", "undefined"])
    def test_only_requested_category_is_shown(self, model, subject, category):
        path = _path(subject, model, overridden=True, **{category: True})
        assert path.render() == (
            f"C\n  {category}1  {category}2\nM\n  {category}1  {category}2"
        )

    def test_categories_are_sorted_together(self, model, subject):
        path = _path(subject, model, public=True, private=True, overridden=True)
        assert path.render() == (
            "C\n  private1  private2  public1  public2\nM\n  private1  private2  public1  public2"
        )

    def test_singleton_modules_render_in_brackets(self, model):
        singleton = C.singleton()
        model.set_order(C, [singleton])
        model.stub_methods(singleton, ["public1", "public2"], [], [], [])

        assert _path(C, model, public=True).render() == "[C]\n  public1  public2"

    def test_singleton_of_singleton_renders_nested_brackets(self, model):
        singleton = C.singleton()
        meta = singleton.singleton()
        model.set_order(singleton, [meta])
        model.stub_methods(meta, ["public1", "public2"], [], [], [])

        assert _path(singleton, model, public=True).render() == "[[C]]\n  public1  public2"

    def test_module_without_methods_has_no_blank_line(self, model, subject):
        model.stub_methods(C, [], [], [], [])

        path = _path(subject, model, public=True, overridden=True)
        assert path.render() == "C\nM\n  public1  public2"
        assert str(path) == path.render()

    def test_width_wraps_methods_into_columns(self, model, subject):
        path = _path(subject, model, public=True, protected=True)
        assert path.render(width=28) == (
            "C\n"
            "  protected1  public1\n"
            "  protected2  public2\n"
            "M"
        )


class TestRenderStyles:
    STYLES = StyleTable({
        "module": "`%s'",
        "public": "{%s}",
        "protected": "[%s]",
        "private": "<%s>",
        "undefined": "~%s~",
        "overridden": "(%s)",
    })

    def test_each_name_uses_its_category_template(self, model):
        subject = object()
        model.set_order(subject, [C])
        model.stub_methods(C, ["public"], ["protected"], ["private"], ["undefined"])

        path = _path(
            subject, model, self.STYLES,
            public=True, protected=True, private=True, undefined=True, overridden=True,
        )
        assert path.render() == "`C'\n  <private>  [protected]  {public}  ~undefined~"

    def test_overridden_wraps_the_category_template(self, model):
        subject = object()
        model.set_order(subject, [C, D])
        model.stub_methods(C, [], [], ["secret"], [])
        model.stub_methods(D, [], [], ["secret"], [])

        path = _path(subject, model, self.STYLES, private=True, overridden=True)
        assert path.render() == "`C'\n  <secret>\n`D'\n  (<secret>)"

    def test_singleton_brackets_are_inside_module_style(self, model):
        singleton = C.singleton()
        model.set_order(C, [singleton])

        assert _path(C, model, self.STYLES, public=True).render() == "`[C]'"
