"""Sample Markdown documents for testing.

These fixtures represent editor content used for:
- Testing Markdown to HTML rendering
- Testing round-trip conversion (Markdown → HTML → Markdown)
- Testing classification
"""

# Simple markdown with headings, paragraphs, and lists
SAMPLE_MARKDOWN_SIMPLE = """# Test Page

This is a simple test page with basic formatting.

## Section 1

Some content in section 1.

- Item 1
- Item 2
- Item 3

## Section 2

Some content in section 2.

1. First
2. Second
3. Third
"""

# Markdown with a pipe table
SAMPLE_MARKDOWN_WITH_TABLES = """# Page with Tables

| Name | Role |
|------|------|
| Ada | Engineer |
| Grace | Admiral |
"""

# Markdown with a fenced code block
SAMPLE_MARKDOWN_WITH_CODE = """# Code Example

```python
def greet(name):
    return f"Hello {name}"
```
"""

# Markdown with task list items
SAMPLE_MARKDOWN_TASKS = """## Todo

- [x] Write tests
- [ ] Ship release
"""

# Every GFM feature the engine reports on
SAMPLE_MARKDOWN_ALL_FEATURES = """# Everything

Inline <kbd>Ctrl</kbd> key.

[Docs](https://example.com "Documentation")

![Logo](https://example.com/logo.png "Company logo")

| A | B |
|---|---|
| 1 | 2 |

```js
console.log(1);
```

- [ ] open task
"""

# Duplicate headings must receive distinct ids
SAMPLE_MARKDOWN_DUPLICATE_HEADINGS = """# Notes

# Notes

# Notes
"""

# Markdown that tries to smuggle script into the output
SAMPLE_MARKDOWN_MALICIOUS = """# Hello

<script>alert('xss')</script>

[click](javascript:alert(1))

<img src="x.png" onerror="alert(1)" data-track="1">
"""
