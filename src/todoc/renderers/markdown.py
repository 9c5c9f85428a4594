"""
Markdown renderer.

Formats a DocumentModel as Markdown: one section per file and one block
per documented function (signature, brief, includes, parameters,
returns, note, description), separated by horizontal rules.
"""

from todoc.models import (
    BulletList,
    Code,
    DescriptionNode,
    DocEntry,
    DocumentedFunction,
    DocumentModel,
    FileDocument,
    Formula,
    HTMLLink,
    ParamDoc,
    ReturnDoc,
    Text,
)


class MarkdownRenderer:
    """Render the document model to Markdown.

    Attributes:
        include_undocumented: Render declarations that have no DocEntry

    Example:
        >>> MarkdownRenderer().render(model).startswith("# ")
        True
    """

    def __init__(self, include_undocumented: bool = True) -> None:
        self.include_undocumented = include_undocumented

    def render(self, model: DocumentModel) -> str:
        """Render every file of the model, in model order."""
        return "".join(self.render_file(document) for document in model.files)

    def render_file(self, document: FileDocument) -> str:
        s = f"# {document.path or 'source'}\n\n"
        for function in document.functions:
            if not function.is_documented and not self.include_undocumented:
                continue
            s += self.render_function(function)
            s += "---\n\n"
        return s

    def render_function(self, function: DocumentedFunction) -> str:
        """Format a single documented function block.

        Args:
            function: Declaration with optional documentation.

        Returns:
            Markdown text ending with a blank line.

        Example:
            >>> MarkdownRenderer().render_function(fn).splitlines()[0]
            '```lua'
        """
        s = self._format_signature(function.declaration.signature)
        doc = function.doc
        if doc is None:
            return s + "*Undocumented.*\n\n"

        s += self._format_brief(doc)
        s += self._format_includes(doc.includes)
        s += self._format_parameters(doc.params)
        s += self._format_returns(doc.returns)
        s += self._format_note(doc)
        s += self._format_description(doc.description)
        return s

    # ==================== SECTIONS ====================

    def _format_signature(self, signature: str) -> str:
        return f"```lua\n{signature}\n```\n\n"

    def _format_brief(self, doc: DocEntry) -> str:
        return f"**Brief:** {doc.brief}\n\n" if doc.brief else ""

    def _format_includes(self, includes: tuple[str, ...]) -> str:
        return f"**Includes:** {', '.join(includes)}\n\n" if includes else ""

    def _format_parameters(self, params: tuple[ParamDoc, ...]) -> str:
        if not params:
            return ""
        s = "**Parameters:**\n"
        for p in params:
            s += f"- {p.name} ({p.type_name}): {p.description}\n"
        return s + "\n"

    def _format_returns(self, returns: tuple[ReturnDoc, ...]) -> str:
        if not returns:
            return ""
        s = "**Returns:**\n"
        for r in returns:
            s += f"- ({r.type_name}): {r.description}\n"
        return s + "\n"

    def _format_note(self, doc: DocEntry) -> str:
        return f"**Note:** {doc.note}\n\n" if doc.note else ""

    def _format_description(self, nodes: tuple[DescriptionNode, ...]) -> str:
        if not nodes:
            return ""
        s = "**Description:**\n\n"
        for node in nodes:
            s += self._format_node(node)
        return s + "\n"

    def _format_node(self, node: DescriptionNode) -> str:
        if isinstance(node, Text):
            return f"{node.content}\n\n"
        if isinstance(node, Code):
            return f"```{node.language or ''}\n{node.content}\n```\n\n"
        if isinstance(node, Formula):
            if node.block:
                return f"$$\n{node.content}\n$$\n\n"
            return f"${node.content}$\n\n"
        if isinstance(node, BulletList):
            return "".join(f"- {item}\n" for item in node.items) + "\n"
        if isinstance(node, HTMLLink):
            return f"[{node.label or node.url}]({node.url})\n\n"
        raise TypeError(f"Unknown description node: {type(node).__name__}")
