"""Instruction templates for each analysis category."""

from __future__ import annotations

from modernizer.models.analysis import AnalysisCategory, AnalysisTypeInfo


class InvalidAnalysisTypeError(ValueError):
    """Raised for a category that has no prompt template."""

    def __init__(self, category: str):
        super().__init__("Invalid analysis type")
        self.category = category


ANALYSIS_PROMPTS: dict[str, str] = {
    AnalysisCategory.MODERNIZATION.value: """Analyze the provided code for modernization opportunities. Focus on:
  - Outdated syntax and patterns
  - Modern language features that could be used
  - Framework/library updates
  - Best practices implementation
  Provide specific suggestions with code examples.""",
    AnalysisCategory.TRANSFORMATION.value: """Transform the provided code to improve its structure and maintainability. Focus on:
  - Code refactoring opportunities
  - Design pattern implementation
  - Function decomposition
  - Variable naming improvements
  - Code organization
  Provide before/after examples with explanations.""",
    AnalysisCategory.ARCHITECTURE.value: """Review the architecture of the provided code. Analyze:
  - Overall design patterns
  - Separation of concerns
  - Scalability considerations
  - Maintainability issues
  - Architectural improvements
  Provide architectural recommendations with diagrams if applicable.""",
    AnalysisCategory.PERFORMANCE.value: """Analyze the code for performance optimization opportunities. Focus on:
  - Algorithm efficiency
  - Memory usage optimization
  - Database query optimization
  - Caching strategies
  - Resource management
  Provide specific performance improvements with benchmarks.""",
    AnalysisCategory.SECURITY.value: """Identify security vulnerabilities in the provided code. Look for:
  - Input validation issues
  - Authentication/authorization flaws
  - Data exposure risks
  - Injection vulnerabilities
  - Security best practices violations
  Provide specific fixes and security recommendations.""",
    AnalysisCategory.DOCUMENTATION.value: """Generate comprehensive documentation for the provided code. Include:
  - Function/class descriptions
  - Parameter documentation
  - Usage examples
  - API documentation
  - README content
  Provide well-structured documentation in markdown format.""",
    AnalysisCategory.CICD.value: """Analyze the code for CI/CD pipeline improvements. Focus on:
  - Build optimization
  - Testing strategies
  - Deployment automation
  - Quality gates
  - Monitoring and logging
  Provide CI/CD configuration recommendations.""",
    AnalysisCategory.COMPLEXITY.value: """Analyze and reduce code complexity. Focus on:
  - Cyclomatic complexity reduction
  - Function length optimization
  - Nested conditionals simplification
  - Code readability improvements
  - Maintainability enhancements
  Provide refactored code with complexity metrics.""",
    AnalysisCategory.REPORTING.value: """Generate a comprehensive analysis report covering:
  - Summary of all findings
  - Priority recommendations
  - Implementation roadmap
  - Risk assessment
  - Success metrics
  Provide a structured report with actionable insights.""",
}

CATEGORY_NAMES: dict[str, str] = {
    AnalysisCategory.MODERNIZATION.value: "Modernization",
    AnalysisCategory.TRANSFORMATION.value: "Transformation",
    AnalysisCategory.ARCHITECTURE.value: "Architecture",
    AnalysisCategory.PERFORMANCE.value: "Performance",
    AnalysisCategory.SECURITY.value: "Security",
    AnalysisCategory.DOCUMENTATION.value: "Documentation",
    AnalysisCategory.CICD.value: "CI/CD",
    AnalysisCategory.COMPLEXITY.value: "Complexity",
    AnalysisCategory.REPORTING.value: "Reporting",
}


def build_prompt(category: str, code: str) -> str:
    """Combine a category's template with the code to analyze."""
    template = ANALYSIS_PROMPTS.get(category)
    if template is None:
        raise InvalidAnalysisTypeError(category)
    return f"{template}\n\nCode to analyze:\n```\n{code}\n```"


def list_analysis_types() -> list[AnalysisTypeInfo]:
    return [
        AnalysisTypeInfo(
            id=category,
            name=CATEGORY_NAMES[category],
            description=template.split("\n")[0],
        )
        for category, template in ANALYSIS_PROMPTS.items()
    ]
