"""Tests for the structconf.walker module."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

import pytest

from structconf.exceptions import CannotSetError
from structconf.flags import FlagSet
from structconf.kinds import Float32, Kind, UInt16
from structconf.models import BindContext, Source, setting
from structconf.walker import StructWalker, describe


@dataclass
class Inner:
    level: UInt16 = setting("3", help="nesting level")
    ratio: Float32 = Float32(0.0)


@dataclass
class Middle:
    inner: Inner = field(default_factory=Inner)
    label: str = setting(env="LABEL_OVERRIDE")


@dataclass
class Outer:
    middle: Middle = field(default_factory=Middle)
    enabled: bool = setting("true", required=True)


@dataclass
class Simple:
    port: int = setting("80")
    host: str = setting("localhost")


@dataclass
class Private:
    _hidden: int = 0


class TestStructWalker:
    """Tests for StructWalker.walk."""

    def test_visits_in_declaration_order(self, make_context: Callable[..., BindContext], flag_set: FlagSet) -> None:
        """Bindings follow field order."""
        walker = StructWalker(make_context(), flag_set)
        walker.walk(Simple())
        assert [b.path for b in walker.bindings] == ["port", "host"]
        assert flag_set.keys == ["port", "host"]

    def test_prefix_applies_to_keys(self, make_context: Callable[..., BindContext], flag_set: FlagSet) -> None:
        """The initial prefix path shapes every key."""
        walker = StructWalker(make_context(env_prefix="X"), flag_set)
        walker.walk(Simple(), "web front")
        binding = walker.bindings[0]
        assert binding.flag == "web-front-port"
        assert binding.env == "X_WEB_FRONT_PORT"

    def test_sources_before_parse(self, make_context: Callable[..., BindContext], flag_set: FlagSet) -> None:
        """Sources are resolved from args, environ and defaults."""
        ctx = make_context(args=["-port", "1"], environ={"HOST": "h"})
        walker = StructWalker(ctx, flag_set)
        cfg = Simple()
        walker.walk(cfg)
        assert [b.source for b in walker.bindings] == [Source.FLAG, Source.ENV]
        assert cfg.port == 1
        assert cfg.host == "h"

    def test_does_not_parse(self, make_context: Callable[..., BindContext], flag_set: FlagSet) -> None:
        """Walking registers flags but leaves parsing to the caller."""
        StructWalker(make_context(), flag_set).walk(Simple())
        assert not flag_set.parsed

    def test_private_field(self, make_context: Callable[..., BindContext], flag_set: FlagSet) -> None:
        """Private fields abort the walk."""
        with pytest.raises(CannotSetError):
            StructWalker(make_context(), flag_set).walk(Private())

    def test_deep_nesting(self, make_context: Callable[..., BindContext], flag_set: FlagSet) -> None:
        """Keys of nested fields carry the struct name."""

        @dataclass
        class Root:
            a: Simple = field(default_factory=Simple)

        cfg = Root()
        StructWalker(make_context(environ={"A_PORT": "81"}), flag_set).walk(cfg)
        assert cfg.a.port == 81
        assert "a-port" in flag_set


class TestDescribe:
    """Tests for describe function."""

    def test_lists_every_leaf(self) -> None:
        """One entry per scalar field, depth first."""
        infos = describe(Outer)
        assert [info.path for info in infos] == [
            "middle.inner.level",
            "middle.inner.ratio",
            "middle.label",
            "enabled",
        ]

    def test_keys_and_metadata(self) -> None:
        """Flag, env, kind, default, required and help are reported."""
        infos = {info.path: info for info in describe(Outer(), "svc", env_prefix="APP")}
        level = infos["middle.inner.level"]
        assert level.flag == "svc-middle-inner-level"
        assert level.env == "APP_SVC_MIDDLE_INNER_LEVEL"
        assert level.kind == Kind.UINT16.value
        assert level.default == "3"
        assert level.help == "nesting level"
        assert infos["middle.label"].env == "LABEL_OVERRIDE"
        assert infos["enabled"].required is True

    def test_unsupported_reported(self) -> None:
        """Unsupported kinds are flagged instead of raising."""
        ratio = next(info for info in describe(Outer) if info.path == "middle.inner.ratio")
        assert ratio.supported is False
        assert ratio.kind == "float32"

    def test_reads_nothing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """The environment has no effect on the listing."""
        monkeypatch.setenv("PORT", "not-a-number")
        infos = describe(Simple)
        assert infos[0].default == "80"

    def test_not_a_dataclass(self) -> None:
        """Plain classes are rejected."""
        with pytest.raises(TypeError, match="expected a dataclass"):
            describe(int)

    def test_private_field(self) -> None:
        """Private fields fail like they do when binding."""
        with pytest.raises(CannotSetError):
            describe(Private)
