"""Code snippet generation for collection endpoints.

Renders ready-to-paste client code for one collection. Stored keys are
hashed, so snippets carry the ``YOUR_API_KEY`` placeholder.
"""

import json
from pprint import pformat
from typing import Any

from jinja2 import TemplateSyntaxError, UndefinedError
from jinja2.sandbox import SandboxedEnvironment

from simpledata.core.logging import get_logger

logger = get_logger(__name__)

API_KEY_PLACEHOLDER = "YOUR_API_KEY"
PLACEHOLDER_DOCUMENT = {"name": "John Doe", "email": "john@example.com"}

_FETCH_TEMPLATES = {
    "create": """// Create Record
fetch('{{ endpoint }}', {
  method: 'POST',
  headers: {
    'Content-Type': 'application/json',
    'x-api-key': '{{ api_key }}'
  },
  body: JSON.stringify({{ sample_json }})
})
  .then(res => res.json())
  .then(data => console.log(data))
  .catch(err => console.error(err));""",
    "getAll": """// Get All Records
fetch('{{ endpoint }}', {
  headers: { 'x-api-key': '{{ api_key }}' }
})
  .then(res => res.json())
  .then(data => console.log(data))
  .catch(err => console.error(err));""",
    "getOne": """// Get Single Record
fetch('{{ endpoint }}/RECORD_ID', {
  headers: { 'x-api-key': '{{ api_key }}' }
})
  .then(res => res.json())
  .then(data => console.log(data));""",
    "update": """// Update Record
fetch('{{ endpoint }}/RECORD_ID', {
  method: 'PUT',
  headers: {
    'Content-Type': 'application/json',
    'x-api-key': '{{ api_key }}'
  },
  body: JSON.stringify({{ sample_json }})
})
  .then(res => res.json())
  .then(data => console.log(data));""",
    "delete": """// Delete Record
fetch('{{ endpoint }}/RECORD_ID', {
  method: 'DELETE',
  headers: { 'x-api-key': '{{ api_key }}' }
})
  .then(res => res.json())
  .then(data => console.log(data));""",
    "batchCreate": """// Batch Create Multiple Records
fetch('{{ endpoint }}/batch', {
  method: 'POST',
  headers: {
    'Content-Type': 'application/json',
    'x-api-key': '{{ api_key }}'
  },
  body: JSON.stringify({
    records: [{{ sample_compact }}, {{ sample_compact }}]
  })
})
  .then(res => res.json())
  .then(data => console.log(data));""",
}

SNIPPET_TEMPLATES: dict[str, dict[str, str]] = {
    "javascript": _FETCH_TEMPLATES,
    "fetch": _FETCH_TEMPLATES,
    "axios": {
        "create": """// Create Record (Axios)
const axios = require('axios');

axios.post('{{ endpoint }}', {{ sample_json }}, {
  headers: { 'x-api-key': '{{ api_key }}' }
})
  .then(response => console.log(response.data))
  .catch(error => console.error(error));""",
        "getAll": """// Get All Records (Axios)
axios.get('{{ endpoint }}', {
  headers: { 'x-api-key': '{{ api_key }}' }
})
  .then(response => console.log(response.data))
  .catch(error => console.error(error));""",
    },
    "python": {
        "create": """# Create Record (Python)
import requests

url = '{{ endpoint }}'
headers = {'x-api-key': '{{ api_key }}', 'Content-Type': 'application/json'}
data = {{ sample_python }}

response = requests.post(url, json=data, headers=headers)
print(response.json())""",
        "getAll": """# Get All Records (Python)
import requests

url = '{{ endpoint }}'
headers = {'x-api-key': '{{ api_key }}'}

response = requests.get(url, headers=headers)
print(response.json())""",
    },
    "curl": {
        "create": """# Create Record (cURL)
curl -X POST '{{ endpoint }}' \\
  -H 'Content-Type: application/json' \\
  -H 'x-api-key: {{ api_key }}' \\
  -d '{{ sample_compact }}'""",
        "getAll": """# Get All Records (cURL)
curl -X GET '{{ endpoint }}' \\
  -H 'x-api-key: {{ api_key }}'""",
    },
}

SUPPORTED_LANGUAGES = tuple(SNIPPET_TEMPLATES)


class SnippetGenerator:
    """Renders client snippets with a sandboxed Jinja2 environment."""

    def __init__(self) -> None:
        self.env = SandboxedEnvironment(autoescape=False, keep_trailing_newline=False)

    def generate(
        self,
        language: str,
        api_url: str,
        project_id: str,
        collection: str,
        sample: dict[str, Any] | None = None,
    ) -> dict[str, str]:
        """Render every snippet for ``language``.

        Args:
            language: One of ``SUPPORTED_LANGUAGES``.
            api_url: Public base URL of the API.
            project_id: Project the snippets address.
            collection: Collection the snippets address.
            sample: Example document; a placeholder document when None.

        Returns:
            Mapping of operation name to snippet text, empty for an
            unknown language.
        """
        templates = SNIPPET_TEMPLATES.get(language)
        if templates is None:
            logger.debug("Unknown snippet language", language=language)
            return {}

        document = sample or PLACEHOLDER_DOCUMENT
        variables = {
            "endpoint": f"{api_url.rstrip('/')}/api/{project_id}/{collection}",
            "api_key": API_KEY_PLACEHOLDER,
            "sample_json": json.dumps(document, indent=2),
            "sample_compact": json.dumps(document),
            "sample_python": pformat(document, indent=2),
        }

        try:
            return {
                name: self.env.from_string(source).render(**variables)
                for name, source in templates.items()
            }
        except (TemplateSyntaxError, UndefinedError) as e:
            logger.error("Snippet rendering failed", language=language, error=str(e))
            raise


_snippet_generator: SnippetGenerator | None = None


def get_snippet_generator() -> SnippetGenerator:
    """Get the global snippet generator instance."""
    global _snippet_generator
    if _snippet_generator is None:
        _snippet_generator = SnippetGenerator()
    return _snippet_generator
