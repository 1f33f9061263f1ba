"""Constants for story set queries."""

from datetime import UTC, datetime


# Label marking a story whose change has an open pull request. Matched exactly.
HAS_PR_LABEL = "has-pr"

# Returned by last_accepted() when no story has been accepted yet
EPOCH_ZERO = datetime(1970, 1, 1, tzinfo=UTC)

# Separator for the sorted label signature of the equivalence key
LABEL_SIGNATURE_SEPARATOR = ","
