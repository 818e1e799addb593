from typing import TypeAlias

import chex
import numpy as np
from pydantic import BaseModel as _BaseModel, ConfigDict

Matrix: TypeAlias = np.ndarray
"""Square, row-major float32 matrix living in host memory."""

PRNGKey: TypeAlias = chex.PRNGKey


class BaseModel(_BaseModel):
    """Pydantic BaseModel subclass to be used throughout the codebase."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    ...
