"""
Layout module for turning a post body and its media into content blocks.
"""

from postlens.core.layout.assembler import (
    NO_CONTENT_MESSAGE,
    assemble_layout,
    link_display_text,
    render_post_content,
)

__all__ = ["assemble_layout", "render_post_content", "link_display_text", "NO_CONTENT_MESSAGE"]
