"""TestRail operations exposed through the gateway.

Each module declares ``descriptors(client)`` returning the operation
descriptors for one TestRail resource.  :func:`build_catalog` registers
them all and freezes the catalog.
"""

import logging

from testrail_mcp.client import TestrailClient
from testrail_mcp.gateway.catalog import OperationCatalog
from testrail_mcp.tools import (
    attachments,
    cases,
    configurations,
    datasets,
    fields,
    labels,
    metadata,
    milestones,
    plans,
    projects,
    reports,
    results,
    runs,
    sections,
    shared_steps,
    suites,
    tests,
    users,
)

logger = logging.getLogger(__name__)

# Registration order; ties in search ranking resolve in this order.
OPERATION_MODULES = (
    projects,
    suites,
    sections,
    cases,
    runs,
    tests,
    results,
    plans,
    milestones,
    metadata,
    fields,
    configurations,
    users,
    reports,
    attachments,
    shared_steps,
    datasets,
    labels,
)


def build_catalog(client: TestrailClient) -> OperationCatalog:
    """Register every TestRail operation bound to *client* and freeze."""
    catalog = OperationCatalog()
    for module in OPERATION_MODULES:
        catalog.register_all(module.descriptors(client))
    catalog.freeze()
    logger.info("Built operation catalog: %d operations", len(catalog))
    return catalog
