"""Prompt template for README generation."""

README_PROMPT = """\
You are an expert technical writer. Generate a comprehensive, professional \
README.md file for the following GitHub repository.

REPOSITORY ANALYSIS:
{digest}

INSTRUCTIONS:
1. Create a well-structured README with proper markdown formatting
2. Include appropriate sections based on the project type and detected technologies
3. Write clear, concise descriptions that would help developers understand and use this project
4. Include installation instructions specific to the detected technologies
5. Add usage examples if you can infer how the project works
6. Include contribution guidelines and other standard sections
7. Make it professional but approachable
8. Use emojis sparingly and appropriately
9. Ensure all code blocks have proper language syntax highlighting

REQUIRED SECTIONS (adapt based on project type):
- Project title and description
- Features (if applicable)
- Technologies used
- Prerequisites
- Installation
- Usage/Getting Started
- API documentation (if it's an API project)
- Contributing
- License
- Contact/Support

Generate a complete, production-ready README.md:"""


def build_readme_prompt(digest: str) -> str:
    return README_PROMPT.format(digest=digest)
