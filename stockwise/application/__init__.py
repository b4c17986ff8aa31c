"""Application workflows layered on the command and finance cores."""
