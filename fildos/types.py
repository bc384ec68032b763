"""Common annotated types for field validation.

These types provide consistent validation patterns across tool arguments
and ledger records.
"""

from typing import Annotated

from pydantic import Field

# EVM-style account address, checksummed or not
ADDRESS_PATTERN = r"^0x[0-9a-fA-F]{40}$"

# Registry-assigned folder handle, decimal digits only
FOLDER_ID_PATTERN = r"^[0-9]+$"


# Account address - compared case-insensitively everywhere
Address = Annotated[str, Field(pattern=ADDRESS_PATTERN)]

# Folder id as it travels on the wire (string form of the registry handle)
FolderId = Annotated[str, Field(min_length=1, pattern=FOLDER_ID_PATTERN)]

# Content identifier of stored bytes
ContentId = Annotated[str, Field(min_length=1)]

# Display filename - any non-empty string, never interpreted as a path
Filename = Annotated[str, Field(min_length=1)]

# Tag attached to a file record
Tag = Annotated[str, Field(min_length=1)]
