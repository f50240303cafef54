"""
Request templates for every n8n tool.

Each tool maps to exactly one Endpoint: an HTTP verb and a path template
whose placeholders are filled from the tool's arguments. The table is the
single source of truth for what a tool sends over the wire.
"""
from dataclasses import dataclass
from string import Formatter
from typing import Any, Optional
from urllib.parse import quote


@dataclass(frozen=True)
class Endpoint:
    """HTTP request template for one tool"""

    name: str
    method: str
    path: str

    @property
    def path_fields(self) -> tuple[str, ...]:
        """Placeholder names used in the path template"""
        return tuple(field for _, field, _, _ in Formatter().parse(self.path) if field)

    def render(self, path_params: Optional[dict[str, Any]] = None) -> str:
        """
        Fill the path template, URL-quoting each value.

        Webhook paths may contain slashes, so those are kept as separators;
        identifiers are quoted as a single segment.

        Raises:
            KeyError: If a placeholder has no value
            ValueError: If a value is empty or a webhook path has "." or ".." segments
        """
        path_params = path_params or {}
        missing = [field for field in self.path_fields if field not in path_params]
        if missing:
            raise KeyError(f"{self.name}: missing path parameters {', '.join(missing)}")

        quoted = {}
        for field in self.path_fields:
            value = str(path_params[field])
            if field == "webhook_path":
                value = value.lstrip("/")
                # dot segments would be collapsed into a path outside /webhook/
                if any(segment in (".", "..") for segment in value.split("/")):
                    raise ValueError(f"Invalid webhook path: {path_params[field]!r}")
                safe = "/"
            else:
                safe = ""
            if not value.strip():
                raise ValueError(f"{self.name}: {field} must not be empty")
            quoted[field] = quote(value, safe=safe)
        return self.path.format(**quoted)


def _table(*endpoints: Endpoint) -> dict[str, Endpoint]:
    table = {}
    for endpoint in endpoints:
        if endpoint.name in table:
            raise ValueError(f"Duplicate endpoint: {endpoint.name}")
        table[endpoint.name] = endpoint
    return table


WORKFLOWS = "/api/v1/workflows"
WORKFLOW = WORKFLOWS + "/{workflow_id}"
EXECUTIONS = "/api/v1/executions"
EXECUTION = EXECUTIONS + "/{execution_id}"
TAGS = "/tags"
TAG = TAGS + "/{tag_id}"
WEBHOOK = "/webhook/{webhook_path}"


ENDPOINTS: dict[str, Endpoint] = _table(
    # Workflows
    Endpoint("retrieve_workflows", "GET", WORKFLOWS),
    Endpoint("retrieve_workflow_by_id", "GET", WORKFLOW),
    Endpoint("create_workflow", "POST", WORKFLOWS),
    Endpoint("update_workflow_by_id", "PUT", WORKFLOW),
    Endpoint("delete_workflow_by_id", "DELETE", WORKFLOW),
    Endpoint("activate_workflow_by_id", "POST", WORKFLOW + "/activate"),
    Endpoint("deactivate_workflow_by_id", "POST", WORKFLOW + "/deactivate"),
    Endpoint("get_workflow_tags_by_workflow_id", "GET", WORKFLOW + "/tags"),
    Endpoint("update_workflow_tags_by_workflow_id", "PUT", WORKFLOW + "/tags"),
    # Webhooks; the verb is switched to POST when a payload is given
    Endpoint("run_workflow", "GET", WEBHOOK),
    # Executions
    Endpoint("retrieve_all_executions", "GET", EXECUTIONS),
    Endpoint("retrieve_execution_by_id", "GET", EXECUTION),
    Endpoint("delete_execution_by_id", "DELETE", EXECUTION),
    # Tags
    Endpoint("create_tag", "POST", TAGS),
    Endpoint("retrieve_tags", "GET", TAGS),
    Endpoint("retrieve_tag_by_id", "GET", TAG),
    Endpoint("update_tag_by_id", "PUT", TAG),
    Endpoint("delete_tag_by_id", "DELETE", TAG),
)
