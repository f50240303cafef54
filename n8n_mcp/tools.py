"""
n8n tools exposed over MCP.

Every public coroutine on N8nTools is one MCP tool: its signature is the
parameter schema and its docstring the description shown to the agent. The
bodies only collect arguments; where they go on the wire is decided by the
matching entry in ENDPOINTS.
"""
import json
import logging
from contextlib import contextmanager
from typing import Annotated, Any, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from .api_client import N8nClient, TransportError
from .endpoints import ENDPOINTS, Endpoint
from .models import ExecutionStatus, TagId, WorkflowSettings

logger = logging.getLogger(__name__)

Limit = Annotated[int, Field(ge=1, le=250)]
Identifier = Annotated[str, Field(min_length=1)]

RUN_SUCCESSFUL = "Workflow run successful"


def format_result(result: Any) -> str:
    """Pretty-print a decoded JSON response as tool text"""
    return json.dumps(result, indent=2)


@contextmanager
def workflow_errors(name: str):
    """Turn transport failures into tool errors the agent can read"""
    try:
        yield
    except TransportError as e:
        logger.info(f"Tool {name} failed: {e}")
        raise ToolError(f"Workflow error: {e}") from e


def _enum_value(value: Optional[ExecutionStatus]) -> Optional[str]:
    return value.value if value is not None else None


def _workflow_body(
    name: str,
    nodes: list[dict[str, Any]],
    connections: dict[str, Any],
    settings: Optional[WorkflowSettings],
    static_data: Optional[dict[str, Any]],
) -> dict[str, Any]:
    body: dict[str, Any] = {
        "name": name,
        "nodes": nodes,
        "connections": connections,
        "settings": (settings or WorkflowSettings()).to_wire(),
    }
    if static_data is not None:
        body["staticData"] = static_data
    return body


class N8nTools:
    """The n8n tool set, bound to one API client"""

    def __init__(self, client: N8nClient):
        self.client = client

    def register(self, mcp: FastMCP) -> None:
        """Register one tool per request template on the server"""
        for name in ENDPOINTS:
            method = getattr(self, name, None)
            if method is None:
                raise RuntimeError(f"No tool implementation for endpoint {name!r}")
            mcp.tool(method)
        logger.debug(f"Registered {len(ENDPOINTS)} n8n tools")

    def _endpoint(self, name: str) -> Endpoint:
        try:
            return ENDPOINTS[name]
        except KeyError:
            raise ToolError(f"Unknown tool: {name}") from None

    def _render(self, endpoint: Endpoint, path_params: Optional[dict[str, Any]] = None) -> str:
        try:
            return endpoint.render(path_params)
        except ValueError as e:
            raise ToolError(f"Workflow error: {e}") from e

    async def dispatch(
        self,
        name: str,
        path_params: Optional[dict[str, Any]] = None,
        params: Optional[dict[str, Any]] = None,
        json_data: Optional[Any] = None,
    ) -> str:
        """
        Issue the request declared for a tool and format the reply.

        Args:
            name: Tool name, used to look up its Endpoint
            path_params: Values for the path template placeholders
            params: Query parameters
            json_data: JSON body

        Returns:
            The response body as pretty-printed JSON

        Raises:
            ToolError: "Workflow error: ..." on any transport failure or an
                unusable path value
        """
        endpoint = self._endpoint(name)
        url = self._render(endpoint, path_params)
        with workflow_errors(name):
            result = await self.client.request(
                endpoint.method, url, params=params, json_data=json_data
            )
        return format_result(result)

    # ============================================================
    # WORKFLOWS TOOLS
    # ============================================================

    async def retrieve_workflows(
        self,
        active: Optional[bool] = None,
        tags: Optional[str] = None,
        name: Optional[str] = None,
        project_id: Optional[str] = None,
        exclude_pinned_data: Optional[bool] = None,
        limit: Optional[Limit] = None,
        cursor: Optional[str] = None,
    ) -> str:
        """
        Retrieve all workflows (with optional parameters for filtering).

        Leave every filter blank to fetch everything. Results are paginated:
        pass the nextCursor value of a previous response as cursor to get the
        next page.

        Note that in order for a returned workflow to be runnable, the first
        node of a workflow entry MUST be of type 'n8n-nodes-base.webhook'.

        Args:
            active: Only return active (true) or inactive (false) workflows
            tags: Comma-separated tag names to filter by
            name: Filter by workflow name
            project_id: Filter by project ID
            exclude_pinned_data: Leave pinned data out of the response
            limit: Maximum number of workflows to return (1-250)
            cursor: Pagination cursor from a previous response

        Returns:
            JSON with a data array and nextCursor
        """
        params = {
            "active": active,
            "tags": tags,
            "name": name,
            "projectId": project_id,
            "excludePinnedData": exclude_pinned_data,
            "limit": limit,
            "cursor": cursor,
        }
        return await self.dispatch("retrieve_workflows", params=params)

    async def retrieve_workflow_by_id(
        self,
        workflow_id: Identifier,
        exclude_pinned_data: Optional[bool] = None,
    ) -> str:
        """
        Retrieve the details of a single workflow by its ID.

        Args:
            workflow_id: The workflow ID to fetch
            exclude_pinned_data: Leave pinned data out of the response
        """
        return await self.dispatch(
            "retrieve_workflow_by_id",
            path_params={"workflow_id": workflow_id},
            params={"excludePinnedData": exclude_pinned_data},
        )

    async def create_workflow(
        self,
        name: str,
        nodes: list[dict[str, Any]],
        connections: dict[str, Any],
        settings: Optional[WorkflowSettings] = None,
        static_data: Optional[dict[str, Any]] = None,
    ) -> str:
        """
        Create a new workflow.

        Args:
            name: The name of your workflow
            nodes: The nodes you want to use in your workflow
            connections: The connections you want for your workflow, keyed by source node name
            settings: Workflow settings; n8n defaults are used when omitted
            static_data: Initial static data for the workflow

        Returns:
            JSON of the created workflow
        """
        body = _workflow_body(name, nodes, connections, settings, static_data)
        return await self.dispatch("create_workflow", json_data=body)

    async def update_workflow_by_id(
        self,
        workflow_id: Identifier,
        name: str,
        nodes: list[dict[str, Any]],
        connections: dict[str, Any],
        settings: Optional[WorkflowSettings] = None,
        static_data: Optional[dict[str, Any]] = None,
    ) -> str:
        """
        Updates a workflow.

        The workflow is replaced as a whole, so send the complete node and
        connection lists, not just the changes.

        Args:
            workflow_id: The ID of the workflow to be updated
            name: The name of your workflow
            nodes: The nodes you want to use in your workflow
            connections: The connections you want for your workflow
            settings: Workflow settings; n8n defaults are used when omitted
            static_data: Static data for the workflow
        """
        body = _workflow_body(name, nodes, connections, settings, static_data)
        return await self.dispatch(
            "update_workflow_by_id",
            path_params={"workflow_id": workflow_id},
            json_data=body,
        )

    async def delete_workflow_by_id(self, workflow_id: Identifier) -> str:
        """
        Delete a single workflow by its ID.

        Args:
            workflow_id: The workflow ID to use
        """
        return await self.dispatch(
            "delete_workflow_by_id", path_params={"workflow_id": workflow_id}
        )

    async def activate_workflow_by_id(self, workflow_id: Identifier) -> str:
        """Activates a single workflow by ID."""
        return await self.dispatch(
            "activate_workflow_by_id", path_params={"workflow_id": workflow_id}
        )

    async def deactivate_workflow_by_id(self, workflow_id: Identifier) -> str:
        """Deactivates a single workflow by ID."""
        return await self.dispatch(
            "deactivate_workflow_by_id", path_params={"workflow_id": workflow_id}
        )

    async def get_workflow_tags_by_workflow_id(self, workflow_id: Identifier) -> str:
        """Gets the tags of a single workflow by ID."""
        return await self.dispatch(
            "get_workflow_tags_by_workflow_id", path_params={"workflow_id": workflow_id}
        )

    async def update_workflow_tags_by_workflow_id(
        self,
        workflow_id: Identifier,
        tags: list[TagId],
    ) -> str:
        """
        Updates the tags of a single workflow to the provided tags.

        Tags not in the list are removed from the workflow.

        Args:
            workflow_id: The workflow ID to use
            tags: The IDs of the tags to assign to this workflow, e.g. [{"id": "abc"}]
        """
        body = [tag.model_dump() for tag in tags]
        return await self.dispatch(
            "update_workflow_tags_by_workflow_id",
            path_params={"workflow_id": workflow_id},
            json_data=body,
        )

    async def run_workflow(self, webhook_path: Identifier, data: Optional[Any] = None) -> str:
        """
        Run a workflow.

        If you don't have a webhook path to use, retrieve all workflows and
        search for an appropriate workflow to run (according to the user's
        prompt). The path is configured on the workflow's webhook node.

        When both N8N_USER and N8N_PASSWORD are configured, the webhook call
        carries them as HTTP basic auth; REST calls only use the API key.

        Args:
            webhook_path: The path of the webhook that belongs to the workflow to run
            data: The data to pass to the webhook. If the user has not
                explicitly asked for data to be sent, leave this empty.

        Returns:
            The webhook's JSON reply, its text reply, or a confirmation when it replies with nothing
        """
        endpoint = self._endpoint("run_workflow")
        url = self._render(endpoint, {"webhook_path": webhook_path})
        # GET without a payload, POST with one
        method = endpoint.method if data is None else "POST"

        with workflow_errors("run_workflow"):
            response = await self.client.send(
                method, url, json_data=data, auth=self.client.config.basic_auth
            )

        if not response.content:
            return RUN_SUCCESSFUL
        try:
            return format_result(response.json())
        except ValueError:
            return response.text

    # ============================================================
    # EXECUTIONS TOOLS
    # ============================================================

    async def retrieve_all_executions(
        self,
        include_data: Optional[bool] = None,
        status: Optional[ExecutionStatus] = None,
        workflow_id: Optional[str] = None,
        project_id: Optional[str] = None,
        limit: Optional[Limit] = None,
        cursor: Optional[str] = None,
    ) -> str:
        """
        Retrieve all executions.

        Args:
            include_data: Whether or not to include the execution's detailed data
            status: The status of an execution. Can either be: 'error' | 'success' | 'waiting'
            workflow_id: Workflow ID to filter executions by
            project_id: Project ID to filter executions by
            limit: The maximum number of items to return (1-250)
            cursor: Pagination cursor. Leave blank to get the first page, or
                pass nextCursor from a previous response to get the next one.

        Returns:
            JSON with a data array and nextCursor
        """
        params = {
            "includeData": include_data,
            "status": _enum_value(status),
            "workflowId": workflow_id,
            "projectId": project_id,
            "limit": limit,
            "cursor": cursor,
        }
        return await self.dispatch("retrieve_all_executions", params=params)

    async def retrieve_execution_by_id(
        self,
        execution_id: Identifier,
        include_data: Optional[bool] = None,
    ) -> str:
        """
        Retrieve an execution by ID.

        Args:
            execution_id: The execution ID to use
            include_data: Whether or not to include the execution's detailed data
        """
        return await self.dispatch(
            "retrieve_execution_by_id",
            path_params={"execution_id": execution_id},
            params={"includeData": include_data},
        )

    async def delete_execution_by_id(self, execution_id: Identifier) -> str:
        """Deletes an execution by ID."""
        return await self.dispatch(
            "delete_execution_by_id", path_params={"execution_id": execution_id}
        )

    # ============================================================
    # TAGS TOOLS
    # ============================================================

    async def create_tag(self, name: str) -> str:
        """
        Create a tag.

        Args:
            name: The name to use
        """
        return await self.dispatch("create_tag", json_data={"name": name})

    async def retrieve_tags(
        self,
        limit: Optional[Limit] = None,
        cursor: Optional[str] = None,
    ) -> str:
        """
        Retrieve all tags.

        Args:
            limit: Maximum number of tags to return (1-250)
            cursor: The cursor for navigating between pages. This isn't provided
                by the user: run this tool first and use the nextCursor it returns.
        """
        return await self.dispatch(
            "retrieve_tags", params={"limit": limit, "cursor": cursor}
        )

    async def retrieve_tag_by_id(self, tag_id: Identifier) -> str:
        """Retrieve a tag by ID."""
        return await self.dispatch("retrieve_tag_by_id", path_params={"tag_id": tag_id})

    async def update_tag_by_id(self, tag_id: Identifier, name: str) -> str:
        """
        Updates a tag by its ID.

        Args:
            tag_id: The tag ID to use
            name: The new name
        """
        return await self.dispatch(
            "update_tag_by_id", path_params={"tag_id": tag_id}, json_data={"name": name}
        )

    async def delete_tag_by_id(self, tag_id: Identifier) -> str:
        """Delete a tag by its ID."""
        return await self.dispatch("delete_tag_by_id", path_params={"tag_id": tag_id})
