"""Tasks - per-user task list operations

Components:
    query.py: Filter, search, sort and paginate a user's tasks
    manager.py: Create, read, patch and delete tasks within a user record

Tasks live inside their user's record in the document store; the functions
here operate on that record and never touch the store themselves. Callers
run them inside a store transaction.

Usage:
    from sooner.tasks.query import query_tasks
    from sooner.tasks.manager import create_task

    with store.transaction() as users:
        user = find_user(users, user_id)
        task = create_task(user, {"description": "call the bank", "priority": "sooner"})

    page = query_tasks(user["tasks"], sort="priorityAsc", page=1)
"""

# Priorities, most urgent first
PRIORITIES = ("sooner", "later", "maybe never")

# Status given to new tasks; also the "unresolved" status
DEFAULT_STATUS = "created"

# Sort modes understood by the query pipeline
SORT_MODES = ("priorityAsc", "priorityDesc", "dateNewerFirst", "dateOlderFirst")

PAGE_SIZE = 9

# Fields the server assigns and callers may not change
IMMUTABLE_FIELDS = ("taskId", "creationDate")
