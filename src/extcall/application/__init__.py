"""Application – data masking for outbound call logs."""
