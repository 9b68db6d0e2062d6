"""Tests for authoring contexts and element ownership."""

import logging

import pytest

from testdoc import (
    ContextBase,
    ContextFactory,
    DanglingElementError,
    DocumentConfig,
    OwnershipLedger,
    Section,
    Text,
    document,
    render,
)


@pytest.fixture
def factory():
    """Factory with text and section registered."""
    return ContextFactory().use_element("text", Text).use_container("section", Section)


class TestDispose:
    """Tests for flushing tentative elements."""

    def test_flushes_in_creation_order(self, factory):
        """Test tentative elements land in the container in creation order."""
        section = Section("Target")
        base = ContextBase(section, factory)
        first = base.element(Text("first"))
        second = base.element(Text("second"))

        base.dispose()

        assert section.elements == [first, second]
        assert base.tentative == ()

    def test_dispose_is_idempotent(self, factory):
        """Test a second dispose does not flush again."""
        section = Section("Target")
        base = ContextBase(section, factory)
        base.element(Text("only once"))

        base.dispose()
        base.dispose()

        assert len(section.elements) == 1
        assert base.disposed

    def test_context_manager_disposes(self, factory):
        """Test leaving a with block disposes the context."""
        section = Section("Target")
        with ContextBase(section, factory) as base:
            base.element(Text("inside"))

        assert base.disposed
        assert len(section.elements) == 1

    def test_element_returned_unchanged(self, factory):
        """Test registering returns the same object for chaining."""
        base = ContextBase(Section("Target"), factory)
        text = Text("x")

        assert base.element(text) is text


class TestDisposedContext:
    """Tests for elements created through a disposed context."""

    def test_warns_and_drops(self, factory, caplog):
        """Test the element is left unattached and a warning is logged."""
        section = Section("Target")
        base = ContextBase(section, factory)
        base.dispose()

        with caplog.at_level(logging.WARNING, logger="testdoc.context"):
            base.element(Text("late"))

        assert section.elements == []
        assert "disposed context" in caplog.text

    def test_strict_raises(self, factory):
        """Test strict contexts refuse elements after disposal."""
        base = ContextBase(Section("Target"), factory, strict=True)
        base.dispose()

        with pytest.raises(DanglingElementError):
            base.element(Text("late"))

    @pytest.mark.asyncio
    async def test_strict_document_raises_for_escaped_context(self):
        """Test a context kept past its callback cannot be reused in strict mode."""
        doc = document(DocumentConfig(strict=True))
        captured = {}

        def keep(ctx):
            captured["ctx"] = ctx

        await doc.body(keep)

        with pytest.raises(DanglingElementError):
            captured["ctx"].text("late")


class TestListMode:
    """Tests for filling containers from explicit lists."""

    def test_fills_without_awaiting(self, factory):
        """Test the container is populated before the result is awaited."""
        base = ContextBase(Section("Root"), factory)
        listed = base.element(Text("listed"))
        target = Section("Target")

        base.container(target, [listed])

        assert target.elements == [listed]
        assert base.tentative == ()

    @pytest.mark.asyncio
    async def test_awaiting_gives_container(self, factory):
        """Test awaiting a list-mode result resolves to the container."""
        base = ContextBase(Section("Root"), factory)
        target = Section("Target")

        assert await base.container(target, []) is target

    @pytest.mark.asyncio
    async def test_reparents_tentative_elements(self, factory):
        """Test listed elements move from the tentative list into the container."""
        root = Section("Root")
        base = ContextBase(root, factory)
        listed = base.element(Text("listed"))
        kept = base.element(Text("kept"))
        target = Section("Target")

        await base.container(target, [listed])
        base.dispose()

        assert target.elements == [listed]
        assert root.elements == [kept]

    @pytest.mark.asyncio
    async def test_preserves_list_order(self, factory):
        """Test the list order wins over creation order."""
        base = ContextBase(Section("Root"), factory)
        a = base.element(Text("a"))
        b = base.element(Text("b"))
        target = Section("Target")

        await base.container(target, (b, a))

        assert target.elements == [b, a]

    @pytest.mark.asyncio
    async def test_claims_from_outer_context(self, factory):
        """Test an element created through an outer context is claimed only once."""
        ledger = OwnershipLedger()
        root = Section("Root")
        outer = ContextBase(root, factory, ledger)
        shared = outer.element(Text("shared"))
        middle = Section("Middle")
        inner = outer.child(middle)
        target = Section("Target")

        await inner.container(target, [shared])
        inner.dispose()
        outer.dispose()

        assert target.elements == [shared]
        assert shared not in root.elements
        assert ledger.owner_of(shared) is target

    @pytest.mark.asyncio
    async def test_moves_already_attached_element(self, factory, caplog):
        """Test listing an attached element again moves it and warns."""
        base = ContextBase(Section("Root"), factory)
        text = Text("once")
        first = Section("First")
        second = Section("Second")

        await base.container(first, [text])
        with caplog.at_level(logging.WARNING, logger="testdoc.context"):
            await base.container(second, [text])

        assert first.elements == []
        assert second.elements == [text]
        assert "already attached" in caplog.text

    @pytest.mark.asyncio
    async def test_no_duplication_in_output(self):
        """Test a listed element appears exactly once in the rendered output."""
        doc = document()

        async def write(ctx):
            await ctx.section("MySection", [ctx.text("MyTestString")])

        await doc.body(write)
        result = render(doc, "html")

        assert "<h1>MySection</h1>" in result
        assert result.count("MyTestString") == 1
        assert result.index("MySection") < result.index("MyTestString")


class TestCallbackMode:
    """Tests for filling containers from callbacks."""

    @pytest.mark.asyncio
    async def test_async_callback(self, factory):
        """Test elements created in an async callback land in the container."""
        base = ContextBase(Section("Root"), factory)
        target = Section("Target")

        async def fill(ctx):
            ctx.text("a")
            ctx.text("b")

        result = await base.container(target, fill)

        assert result is target
        assert [t.markdown() for t in target.elements] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_sync_callback(self, factory):
        """Test plain functions are accepted as callbacks."""
        base = ContextBase(Section("Root"), factory)
        target = Section("Target")

        await base.container(target, lambda ctx: ctx.text("sync"))

        assert len(target.elements) == 1

    def test_sync_callback_with_sibling_sections(self, doc):
        """Test list-mode sections written in a plain function are built right away."""

        def write(ctx):
            ctx.section("A", [ctx.text("x")])
            ctx.section("B", [ctx.text("y")])

        doc.build(write)

        assert render(doc, "md") == "# A\n\nx\n# B\n\ny"

    def test_sync_callback_with_nested_sections(self, doc):
        """Test unawaited list-mode sections can be listed inside another section."""

        def write(ctx):
            ctx.section("Outer", [
                ctx.text("first"),
                ctx.section("Inner", [ctx.text("second")]),
            ])

        doc.build(write)

        assert render(doc, "md") == "# Outer\n\nfirst\n## Inner\n\nsecond"
        assert isinstance(doc.elements[0].elements[1], Section)

    @pytest.mark.asyncio
    async def test_child_disposed_before_parent_continues(self, factory):
        """Test nested callbacks complete before the parent goes on."""
        doc = document()
        order = []

        async def inner(ctx):
            ctx.text("inner")
            order.append("inner done")

        async def outer(ctx):
            section = await ctx.section("Inner", inner)
            order.append(f"inner has {len(section.elements)}")
            ctx.text("after")

        async def write(ctx):
            await ctx.section("Outer", outer)

        await doc.body(write)

        assert order == ["inner done", "inner has 1"]
        assert render(doc, "md") == "# Outer\n## Inner\n\ninner\n\nafter"

    @pytest.mark.asyncio
    async def test_callback_receives_registered_kinds(self, factory):
        """Test nested callbacks get the full capability object."""
        base = ContextBase(Section("Root"), factory)
        seen = []

        async def inner(ctx):
            seen.append(type(ctx))

        async def outer(ctx):
            seen.append(type(ctx))
            await ctx.section("Inner", inner)

        await base.container(Section("Outer"), outer)

        assert seen[0] is seen[1] is factory.context_type

    @pytest.mark.asyncio
    async def test_failing_callback_propagates(self, factory):
        """Test exceptions raised by a callback reach the caller."""
        base = ContextBase(Section("Root"), factory)

        async def broken(ctx):
            ctx.text("partial")
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            await base.container(Section("Target"), broken)
