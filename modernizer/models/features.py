"""Code feature flags used by the offline responder."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class CodeFeatures(BaseModel):
    model_config = ConfigDict(frozen=True)

    block_scope: bool = False
    arrow_functions: bool = False
    async_usage: bool = False
    modules: bool = False
    classes: bool = False
    error_handling: bool = False
    console_debug: bool = False
    doc_comments: bool = False
    line_count: int = 0
    function_count: int = 0
    variable_count: int = 0
    is_modern: bool = False
