# Store for tools configuration
TOOLS = [
    {
        "id": "text-diff",
        "name": "Text Diff Tool",
        "description": "Compare two texts side-by-side or inline with word-level highlighting of modified lines",
        "path": "/tools/text-diff",
        "api": "/api/text-diff/compare",
        "tags": ["diff", "compare", "text", "lcs", "similarity"],
        "icon": "⚖️"
    },
]
