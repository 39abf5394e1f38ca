"""
Submission payload builder
"""

from typing import Any, Dict

from ..core import ServiceConfig, QueryRequest, InvalidRequest


def coerce_max_age(value: Any) -> int:
    """
    Coerce a reuse max age to a non-negative int

    Missing, non-numeric and negative values become 0.
    """
    if isinstance(value, bool):
        return 0
    try:
        minutes = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(minutes, 0)


class ExecutionRequestBuilder:
    """Translates a QueryRequest into start_query_execution arguments"""

    def build(self, config: ServiceConfig, request: QueryRequest) -> Dict[str, Any]:
        """
        Build the submission payload

        Args:
            config: Service configuration (database, catalog, workgroup, output location)
            request: Query text and optional reuse policy

        Returns:
            Dict of keyword arguments for start_query_execution

        Raises:
            InvalidRequest: If the query text is empty
        """
        query = request.query
        if not isinstance(query, str) or not query.strip():
            raise InvalidRequest("Query text must be a non-empty string")

        context = {'Database': config.database}
        if config.catalog is not None:
            context['Catalog'] = config.catalog

        reuse = request.effective_reuse
        payload = {
            'QueryString': query,
            'QueryExecutionContext': context,
            'WorkGroup': config.workgroup,
            'ResultReuseConfiguration': {
                'ResultReuseByAgeConfiguration': {
                    'Enabled': bool(reuse.enabled),
                    'MaxAgeInMinutes': coerce_max_age(reuse.max_age_minutes),
                }
            },
        }

        if config.output_location:
            payload['ResultConfiguration'] = {'OutputLocation': config.output_location}

        return payload
