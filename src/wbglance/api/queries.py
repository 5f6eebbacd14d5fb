"""GraphQL documents sent to the service."""

VIEWER_QUERY = """
query Viewer {
    viewer {
        id
        username
    }
}
"""

PROJECTS_QUERY = """
query Projects {
    viewer {
        projects(order: "-createdAt") {
            edges {
                node {
                    id
                    name
                    createdAt
                    entityName
                }
            }
        }
    }
}
"""

RUNS_QUERY = """
query Runs($entityName: String!, $projectName: String!) {
    project(entityName: $entityName, name: $projectName) {
        runs(order: "-createdAt") {
            edges {
                node {
                    id
                    name
                    state
                    createdAt
                }
            }
        }
    }
}
"""

# $runId carries the run *name*; the service looks runs up by name here.
RUN_HISTORY_QUERY = """
query RunHistory($runId: String!, $projectName: String!, $entityName: String!) {
    project(name: $projectName, entityName: $entityName) {
        run(name: $runId) {
            history
        }
    }
}
"""
