from typing import List
from pymongo import IndexModel, ASCENDING, DESCENDING


KNOWLEDGE_COLLECTION = "knowledge"


class MongoDBSchemas:
    """
    Index definitions for the knowledge collection.

    Knowledge documents carry ``title``, ``content``, ``category``,
    ``embedding`` and ``created_at``. Their shape is not enforced here;
    only the fields queried by the chatbot get secondary indexes.
    """

    @staticmethod
    def get_knowledge_indexes() -> List[IndexModel]:
        """
        Indexes for the knowledge collection.

        Names match the ones MongoDB generates for the same key patterns,
        so a database set up by the container's JS init script is
        recognized as already initialized.

        Returns:
            List of IndexModel objects, in creation order
        """
        return [
            # Filter by category
            IndexModel([("category", ASCENDING)], name="category_1"),
            # Most recent first
            IndexModel([("created_at", DESCENDING)], name="created_at_-1"),
        ]
