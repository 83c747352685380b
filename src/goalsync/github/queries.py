"""GraphQL documents used against the GitHub API."""

from __future__ import annotations

# Issue fields shared by ancestry and sub-issue queries. The legacy Goal and
# Team single-select values are read by name through variables.
ISSUE_WITH_DETAILS = """
fragment IssueWithDetails on Issue {
    id
    title
    number
    issueType {
        id
        name
    }
    projectItems(first: 50) {
        nodes {
            id
            project {
                id
                title
            }
            goal: fieldValueByName(name: $legacyGoalField) {
                ... on ProjectV2ItemFieldSingleSelectValue {
                    id
                    name
                    optionId
                }
            }
            team: fieldValueByName(name: $teamField) {
                ... on ProjectV2ItemFieldSingleSelectValue {
                    id
                    name
                    optionId
                }
            }
        }
    }
}
"""

GET_SUB_ISSUES = (
    ISSUE_WITH_DETAILS
    + """
query getSubIssues($issueId: ID!, $legacyGoalField: String!, $teamField: String!) {
    node(id: $issueId) {
        ... on Issue {
            ...IssueWithDetails
            subIssues(first: 50) {
                nodes {
                    ...IssueWithDetails
                }
            }
        }
    }
}
"""
)


def build_get_parent_issue(depth: int) -> str:
    """Build the getParentIssue query with `depth` nested parent levels.

    GraphQL has no recursive selections, so each parent hop is spelled out.
    """
    selection = "...IssueWithDetails"
    for _ in range(depth):
        selection = f"...IssueWithDetails\nparent {{\n{selection}\n}}"
    return (
        ISSUE_WITH_DETAILS
        + """
query getParentIssue($issueId: ID!, $legacyGoalField: String!, $teamField: String!) {
    node(id: $issueId) {
        ... on Issue {
            repository {
                nameWithOwner
            }
"""
        + selection
        + """
        }
    }
}
"""
    )


GET_PROJECT = """
query getProject(
    $projectId: ID!
    $legacyGoalField: String!
    $teamField: String!
    $goalField: String!
    $subGoalField: String!
    $projectField: String!
) {
    node(id: $projectId) {
        ... on ProjectV2 {
            id
            title
            goals: field(name: $legacyGoalField) {
                ... on ProjectV2SingleSelectField {
                    id
                    name
                    options {
                        id
                        name
                    }
                }
            }
            teams: field(name: $teamField) {
                ... on ProjectV2SingleSelectField {
                    id
                    name
                    options {
                        id
                        name
                    }
                }
            }
            goalField: field(name: $goalField) {
                ... on ProjectV2Field {
                    id
                    name
                }
            }
            subGoalField: field(name: $subGoalField) {
                ... on ProjectV2Field {
                    id
                    name
                }
            }
            projectField: field(name: $projectField) {
                ... on ProjectV2Field {
                    id
                    name
                }
            }
        }
    }
}
"""

ADD_PROJECT_TO_ISSUE = """
mutation addProjectToIssue($projectId: ID!, $issueId: ID!) {
    addProjectV2ItemById(input: { projectId: $projectId, contentId: $issueId }) {
        item {
            id
        }
    }
}
"""

UPDATE_TEXT_FIELD = """
mutation updateProjectV2ItemFieldValue(
    $projectId: ID!
    $itemId: ID!
    $fieldId: ID!
    $text: String!
) {
    updateProjectV2ItemFieldValue(
        input: {
            projectId: $projectId
            itemId: $itemId
            fieldId: $fieldId
            value: { text: $text }
        }
    ) {
        projectV2Item {
            id
        }
    }
}
"""

UPDATE_OPTION_FIELD = """
mutation updateProjectV2ItemFieldValue(
    $projectId: ID!
    $itemId: ID!
    $fieldId: ID!
    $optionId: String!
) {
    updateProjectV2ItemFieldValue(
        input: {
            projectId: $projectId
            itemId: $itemId
            fieldId: $fieldId
            value: { singleSelectOptionId: $optionId }
        }
    ) {
        projectV2Item {
            id
        }
    }
}
"""
