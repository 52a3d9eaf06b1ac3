from __future__ import annotations

from loguru import logger

from feishu2html.converter.render_context import RenderContext, render_children
from feishu2html.models.blocks import MergeInfo, TableBlock, TableCellBlock
from feishu2html.models.node import BlockNode


class TableRenderer:
    """按 ``column_size`` 依次切分单元格成行；不足一行的剩余单元格单独成行，不补齐。"""

    def render(self, out: list[str], node: BlockNode[TableBlock], context: RenderContext) -> None:
        data = node.data.table
        prop = data.property if data is not None else None
        cells = [child for child in node.children if isinstance(child.data, TableCellBlock)]
        column_size = prop.column_size if prop is not None and prop.column_size > 0 else 0
        if column_size <= 0:
            column_size = max(1, len(cells))
        merges: list[MergeInfo] | None = None
        if prop is not None and prop.merge_info and len(prop.merge_info) == len(cells):
            merges = prop.merge_info
        header_row = bool(prop and prop.header_row)
        header_column = bool(prop and prop.header_column)
        logger.debug(
            "渲染表格 {}: {} 列，{} 个单元格", node.block_id, column_size, len(cells)
        )

        out.append('<table class="table-block">')
        if prop is not None and prop.column_width:
            out.append("<colgroup>")
            for width in prop.column_width:
                out.append(f'<col style="width: {int(width)}px">')
            out.append("</colgroup>")
        out.append("<tbody>")
        covered: set[tuple[int, int]] = set()
        for row_index, start in enumerate(range(0, len(cells), column_size)):
            out.append("<tr>")
            for col_index, cell in enumerate(cells[start : start + column_size]):
                if (row_index, col_index) in covered:
                    continue
                attrs = ""
                if merges is not None:
                    merge = merges[start + col_index]
                    if merge.row_span > 1:
                        attrs += f' rowspan="{merge.row_span}"'
                    if merge.col_span > 1:
                        attrs += f' colspan="{merge.col_span}"'
                    for r in range(row_index, row_index + max(1, merge.row_span)):
                        for c in range(col_index, col_index + max(1, merge.col_span)):
                            if (r, c) != (row_index, col_index):
                                covered.add((r, c))
                is_header = (header_row and row_index == 0) or (header_column and col_index == 0)
                tag = "th" if is_header else "td"
                out.append(f"<{tag}{attrs}>")
                render_cell_content(out, cell, context)
                out.append(f"</{tag}>")
            out.append("</tr>")
        out.append("</tbody></table>")


def render_cell_content(out: list[str], cell: BlockNode[TableCellBlock], context: RenderContext) -> None:
    data = cell.data.table_cell
    if data is not None and data.elements:
        out.append(context.text_converter.convert(data.elements))
    render_children(out, cell, context)


class TableCellRenderer:
    """单元格通常由表格渲染；单独出现时按普通容器输出。"""

    def render(
        self, out: list[str], node: BlockNode[TableCellBlock], context: RenderContext
    ) -> None:
        out.append('<div class="table-cell">')
        render_cell_content(out, node, context)
        out.append("</div>")


__all__ = ["TableCellRenderer", "TableRenderer", "render_cell_content"]
