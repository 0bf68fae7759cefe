# courseprofs/utils/log_templates.py
# %-style templates shared by services and routers: (entity name, id or entity)

NOT_FOUND = "%s with id %s was not found"
REQUEST_ENTITY = "Requested %s with id %s"
CREATED_ENTITY = "Created %s %s"
UPDATED = "Updated %s %s"
DELETED = "Deleted %s with id %s"
REJECTED = "Rejected %s: %s"
