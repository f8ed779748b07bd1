TITLE = "📝 My To-Do List"
EMPTY_LIST = "No tasks here."

ASK_TEXT = "Enter task..."
ASK_CATEGORY = "Category (e.g. Work, Home)? Send '-' for General."
ASK_DUE_DATE = "Due date? YYYY-MM-DD, 'today', 'tomorrow', or '-' for none."
INVALID_DUE_DATE = "Invalid date."
EMPTY_TEXT = "Task text cannot be empty."

ADDED = "Task added."
TOGGLED = "Updated ✅"
DELETED = "Deleted 🗑️"
NOT_FOUND = "That task no longer exists."
NOT_READY = "Still loading, try again."
CANCELLED = "Cancelled."
NOT_AUTHORIZED = "Not authorized."
