"""Tool that moves the paper viewer to a page, section or keyword."""

from ..base import ChatTool
from ..models import CoercedArguments, ExecutionContext, ParameterType, ToolDefinition, ToolOutcome, ToolParameter


class ScrollToLocationTool(ChatTool):
    """
    Scroll the open paper to a location.

    Targets are tried in priority order page > section > keyword. The tool only
    resolves the target; the viewer does the actual scrolling from the returned data.
    """

    _DEFINITION = ToolDefinition(
        name="scroll_to_location",
        description="Scroll the PDF viewer to a specific page, section, or keyword location",
        parameters={
            "page": ToolParameter(
                type=ParameterType.NUMBER,
                description="Page number to scroll to (1-indexed)",
                required=False,
            ),
            "section": ToolParameter(
                type=ParameterType.STRING,
                description=(
                    "Section name to find (e.g., 'introduction', 'methodology', 'results', "
                    "'conclusion', 'references')"
                ),
                required=False,
            ),
            "keyword": ToolParameter(
                type=ParameterType.STRING,
                description="Keyword to search for and scroll to first occurrence",
                required=False,
            ),
        },
        requires_focus=True,
    )

    @property
    def definition(self) -> ToolDefinition:
        return self._DEFINITION

    async def execute(self, arguments: CoercedArguments, context: ExecutionContext) -> ToolOutcome:
        page = arguments.get("page")
        section = arguments.get("section")
        keyword = arguments.get("keyword")

        if page is None and section is None and keyword is None:
            return ToolOutcome.fail("At least one of 'page', 'section', or 'keyword' must be provided")

        if page is not None:
            if isinstance(page, float) and not page.is_integer():
                return ToolOutcome.fail("Page number must be a whole number")
            page_number = int(page)  # type: ignore[arg-type]
            if page_number < 1:
                return ToolOutcome.fail("Page number must be >= 1")
            return ToolOutcome.ok(
                {"page": page_number, "type": "page"},
                metadata={"message": f"Scrolling to page {page_number}"},
            )

        if section is not None:
            normalized = str(section).strip().lower()
            return ToolOutcome.ok(
                {"section": normalized, "type": "section"},
                metadata={"message": f"Scrolling to section: {normalized}"},
            )

        return ToolOutcome.ok(
            {"keyword": keyword, "type": "keyword"},
            metadata={"message": f"Scrolling to keyword: {keyword}"},
        )
