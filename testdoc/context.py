"""
Authoring contexts and element ownership.

Elements created through a context are *tentative*: the context holds them
until either a container claims them explicitly (list mode) or the context is
disposed and flushes whatever is left into its own container. An
``OwnershipLedger`` shared by every context of a document records who owns
each element, so claiming is a single transfer and an element can never end
up attached twice.
"""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Generator, Generic, Iterable, TypeVar, Union

from .elements import Container, Element
from .errors import DanglingElementError
from .log import get_logger

if TYPE_CHECKING:
    from .registry import ContextFactory

LOGGER = get_logger(__name__)

ContextCallback = Callable[[Any], Union[Awaitable[Any], None]]
CallbackOrList = Union[ContextCallback, Iterable[Element]]

T = TypeVar("T")


class Populated(Generic[T]):
    """Awaitable wrapping a value that is already complete.

    List mode fills its container before returning, so the result can be
    used as is or awaited like the callback form.
    """

    __slots__ = ("value",)

    def __init__(self, value: T):
        self.value = value

    def __await__(self) -> Generator[Any, None, T]:
        yield from ()
        return self.value


class OwnershipLedger:
    """Records the current owner of every element of one document.

    An owner is either a live ``ContextBase`` (the element is tentative) or a
    ``Container`` (the element is attached).
    """

    def __init__(self) -> None:
        # id(element) -> (element, owner); the element is kept alive so ids stay unique
        self._owners: dict[int, tuple[Element, ContextBase | Container]] = {}

    def owner_of(self, element: Element) -> ContextBase | Container | None:
        entry = self._owners.get(id(element))
        return entry[1] if entry else None

    def hold(self, element: Element, context: ContextBase) -> None:
        """Mark ``element`` as tentatively owned by ``context``."""
        self._owners[id(element)] = (element, context)

    def attach(self, element: Element, container: Container) -> None:
        """Transfer ``element`` from its current owner to the end of ``container``."""
        owner = self.owner_of(element)
        if isinstance(owner, ContextBase):
            owner.release(element)
        elif owner is not None and owner.remove_element(element):
            LOGGER.warning(
                "%s was already attached to %s; moving it to %s",
                type(element).__name__,
                type(owner).__name__,
                type(container).__name__,
            )
        container.add_element(element)
        self._owners[id(element)] = (element, container)

    def __len__(self) -> int:
        return len(self._owners)


class ContextBase:
    """Ownership bookkeeping for one scope of authoring, bound to a container."""

    def __init__(
        self,
        container: Container,
        factory: ContextFactory,
        ledger: OwnershipLedger | None = None,
        strict: bool = False,
    ):
        """Initialize a live context.

        Args:
            container: Container that receives the tentative elements on disposal
            factory: Builds the capability object handed to callbacks
            ledger: Ownership ledger shared with the other contexts of the document
            strict: Raise instead of warning when a disposed context is reused
        """
        self._container = container
        self._factory = factory
        self._ledger = ledger if ledger is not None else OwnershipLedger()
        self._strict = strict
        self._tentative: list[Element] = []
        self._disposed = False

    @property
    def bound_container(self) -> Container:
        return self._container

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def tentative(self) -> tuple[Element, ...]:
        """Elements created here and not yet claimed, in creation order."""
        return tuple(self._tentative)

    def element(self, element: Element) -> Element:
        """Record ``element`` as tentatively owned by this context.

        Returns:
            The element unchanged, so calls can be chained

        Raises:
            DanglingElementError: In strict mode, if the context is already disposed
        """
        if self._disposed:
            message = (
                f"{type(element).__name__} created through a disposed context "
                f"will never be attached to {type(self._container).__name__}"
            )
            if self._strict:
                raise DanglingElementError(message)
            LOGGER.warning(message)
            return element

        self._tentative.append(element)
        self._ledger.hold(element, self)
        return element

    def release(self, element: Element) -> bool:
        """Drop ``element`` (matched by identity) from the tentative list."""
        for index, candidate in enumerate(self._tentative):
            if candidate is element:
                del self._tentative[index]
                return True
        return False

    def child(self, container: Container) -> ContextBase:
        """Open a nested context bound to ``container``."""
        return ContextBase(container, self._factory, self._ledger, self._strict)

    def container(self, container: Container, callback_or_list: CallbackOrList) -> Awaitable[Container]:
        """Fill ``container`` from an explicit list or from a callback.

        List mode claims each listed element, in order, from whichever context
        or container holds it, before returning. Callback mode opens a child
        context, passes the callback the full capability object, awaits
        whatever it returns and then disposes the child so its remaining
        elements are flushed; it runs once the result is awaited.

        Args:
            container: Container to fill
            callback_or_list: Ordered elements, or a (sync or async) callback

        Returns:
            An awaitable resolving to the container once fully populated
        """
        if not callable(callback_or_list):
            return Populated(self.claim(container, callback_or_list))
        return self._fill(container, callback_or_list)

    def claim(self, container: Container, elements: Iterable[Element]) -> Container:
        """Attach ``elements`` to the end of ``container``, in order.

        Unawaited list-mode results are accepted in place of their container.
        """
        for element in elements:
            if isinstance(element, Populated):
                element = element.value
            self._ledger.attach(element, container)
        return container

    async def _fill(self, container: Container, callback: ContextCallback) -> Container:
        with self.child(container) as child:
            result = callback(self._factory(child))
            if inspect.isawaitable(result):
                await result
        return container

    def dispose(self) -> None:
        """Flush tentative elements into the bound container, once."""
        if self._disposed:
            return

        pending = list(self._tentative)
        for element in pending:
            self._ledger.attach(element, self._container)
        self._tentative.clear()
        self._disposed = True
        LOGGER.debug("Flushed %d element(s) into %s", len(pending), type(self._container).__name__)

    def __enter__(self) -> ContextBase:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()
