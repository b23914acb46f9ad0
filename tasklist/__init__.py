"""In-memory task list API and its terminal client."""
