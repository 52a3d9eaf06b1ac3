from __future__ import annotations

from typing import Mapping

from loguru import logger

from feishu2html.models.blocks import Block, PageBlock
from feishu2html.models.node import BlockNode


def find_page_block(blocks: Mapping[str, Block]) -> PageBlock | None:
    pages = [block for block in blocks.values() if isinstance(block, PageBlock)]
    if not pages:
        return None
    for page in pages:
        if not page.parent_id:
            return page
    return pages[0]


def build_tree(blocks: Mapping[str, Block]) -> list[BlockNode]:
    """把扁平的 ``{block_id: Block}`` 还原成以 Page 子块为顶层的森林。

    - Page 块本身不进入结果，其 ``children`` 决定顶层顺序；
    - ``children`` 中引用但不存在的块直接跳过；
    - 已经建过节点的块（环或多个父节点）不再重复挂载，结果始终无环；
    - 没有 Page 块时退化为每个非 Page 块一个叶子节点，按输入顺序排列。
    """
    page = find_page_block(blocks)
    if page is None:
        logger.warning("未找到 Page 块，按原始顺序平铺 {} 个块", len(blocks))
        return [
            BlockNode(data=block)
            for block in blocks.values()
            if not isinstance(block, PageBlock)
        ]

    memo: dict[str, BlockNode] = {page.block_id: BlockNode(data=page)}

    def build(block_id: str, parent: BlockNode | None) -> BlockNode | None:
        if block_id in memo:
            logger.debug("块 {} 已存在于树中（环或重复引用），跳过", block_id)
            return None
        block = blocks.get(block_id)
        if block is None:
            logger.debug("子块 {} 不存在，跳过", block_id)
            return None
        node = BlockNode(data=block, parent=parent)
        memo[block_id] = node
        for child_id in block.children or []:
            child = build(child_id, node)
            if child is not None:
                node.children.append(child)
        return node

    roots: list[BlockNode] = []
    for child_id in page.children or []:
        node = build(child_id, None)
        if node is not None:
            roots.append(node)
    logger.debug("构建块树完成: {} 个顶层节点，{} 个节点", len(roots), len(memo) - 1)
    return roots


__all__ = ["build_tree", "find_page_block"]
