from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Iterator, TypeVar

from feishu2html.models.blocks import Block

BlockT = TypeVar("BlockT", bound=Block)


@dataclass(eq=True)
class BlockNode(Generic[BlockT]):
    """树中的一个块。``parent`` 只用于向上查找，不参与比较和 repr。"""

    data: BlockT
    children: list[BlockNode] = field(default_factory=list)
    parent: BlockNode | None = field(default=None, repr=False, compare=False)

    @property
    def block_id(self) -> str:
        return self.data.block_id

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def depth(self) -> int:
        return sum(1 for _ in self.ancestors())

    def ancestors(self) -> Iterator[BlockNode]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def siblings(self) -> list[BlockNode]:
        if self.parent is None:
            return [self]
        return self.parent.children

    def walk(self) -> Iterator[BlockNode]:
        yield self
        for child in self.children:
            yield from child.walk()


__all__ = ["BlockNode"]
