"""Strongly typed identifiers for comment engine entities.

Thread ids are assigned by the document store, comment ids are synthesized
for every node, post ids belong to the external post store.
"""

from typing import NewType

ThreadId = NewType("ThreadId", str)
CommentId = NewType("CommentId", str)
PostId = NewType("PostId", str)
