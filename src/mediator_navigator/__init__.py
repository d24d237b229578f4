"""Jump from a C# mediator request to the class that handles it."""
