"""agentsea: agent execution loops and multi-agent workflows."""
