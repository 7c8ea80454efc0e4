"""
Permissions and Roles Configuration
This config defines the permission matrix for all modules and which profile
roles (profiles.role: admin, supervisor, teacher) are granted each permission.
Used by require_permission and the /auth/me endpoint.
"""

# Define modules and their actions
MODULES = {
    "departments": {
        "resource": "departments",
        "actions": ["create", "read", "update", "delete"],
        "description": "Department management"
    },
    "classes": {
        "resource": "classes",
        "actions": ["create", "read", "update", "delete"],
        "description": "Class management"
    },
    "users": {
        "resource": "users",
        "actions": ["read", "update", "delete", "assign_classes"],
        "description": "User profile management"
    },
    "equipment": {
        "resource": "equipment",
        "actions": ["create", "read", "update", "delete", "return"],
        "description": "Equipment inventory"
    },
    "rooms": {
        "resource": "rooms",
        "actions": ["create", "read", "update", "delete"],
        "description": "Room catalog"
    },
    "reservations": {
        "resource": "reservations",
        "actions": ["create", "read", "update", "delete"],
        "description": "Room and equipment reservations"
    },
    "equipment_requests": {
        "resource": "equipment_requests",
        "actions": ["create", "read", "update", "delete", "approve"],
        "description": "Equipment loan requests"
    },
    "printing_requests": {
        "resource": "printing_requests",
        "actions": ["create", "read", "update", "delete", "approve"],
        "description": "Printing requests"
    },
    "room_requests": {
        "resource": "room_requests",
        "actions": ["create", "read", "update", "delete", "approve"],
        "description": "Room booking requests"
    }
}

REQUEST_RESOURCES = ["equipment_requests", "printing_requests", "room_requests"]
CATALOG_RESOURCES = ["departments", "classes", "equipment", "rooms"]

# Actions granted per role; "*" means every action of the resource
ROLE_TYPES = {
    "admin": {
        "grants": {resource: ["*"] for resource in MODULES},
        "description": "Full administrative access"
    },
    "supervisor": {
        "grants": {
            **{resource: ["read"] for resource in CATALOG_RESOURCES},
            "users": ["read", "update", "assign_classes"],
            "reservations": ["create", "read", "update", "delete"],
            **{resource: ["create", "read", "update", "delete", "approve"] for resource in REQUEST_RESOURCES},
        },
        "description": "First-stage approver and teacher management"
    },
    "teacher": {
        "grants": {
            **{resource: ["read"] for resource in CATALOG_RESOURCES},
            "users": ["read"],
            "reservations": ["create", "read", "update", "delete"],
            **{resource: ["create", "read", "update", "delete"] for resource in REQUEST_RESOURCES},
        },
        "description": "Submits requests and reservations"
    }
}

# Human readable descriptions for non-CRUD actions
MODULE_SPECIFIC_PERMISSIONS = {
    "users": {
        "assign_classes": "Assign classes to teachers"
    },
    "equipment": {
        "return": "Record returned equipment"
    },
    "equipment_requests": {
        "approve": "Approve or reject equipment requests"
    },
    "printing_requests": {
        "approve": "Approve or reject printing requests"
    },
    "room_requests": {
        "approve": "Approve or reject room requests"
    }
}


def get_permission_matrix():
    """
    Returns a dictionary with all permissions and the permissions of each role
    Format: {
        "permissions": [
            {"name": "classes:create", "resource": "classes", "action": "create", "description": "..."},
            ...
        ],
        "roles": [
            {"name": "teacher", "description": "...", "permissions": ["classes:read", ...]},
            ...
        ]
    }
    """
    permissions = []
    roles = []

    for module_name, module_config in MODULES.items():
        resource = module_config["resource"]
        for action in module_config["actions"]:
            description = f"{action.capitalize()} {resource}"
            if module_name in MODULE_SPECIFIC_PERMISSIONS and action in MODULE_SPECIFIC_PERMISSIONS[module_name]:
                description = MODULE_SPECIFIC_PERMISSIONS[module_name][action]
            permissions.append({
                "name": f"{resource}:{action}",
                "resource": resource,
                "action": action,
                "description": description
            })

    for role_name, role_config in ROLE_TYPES.items():
        role_permissions = []
        for resource, actions in role_config["grants"].items():
            module_actions = MODULES[resource]["actions"]
            if "*" in actions:
                actions = module_actions
            for action in actions:
                if action in module_actions:
                    role_permissions.append(f"{resource}:{action}")
        roles.append({
            "name": role_name,
            "description": role_config["description"],
            "permissions": sorted(role_permissions)
        })

    return {
        "permissions": permissions,
        "roles": roles
    }


PERMISSION_MATRIX = get_permission_matrix()


def get_role_permissions(role: str) -> list:
    """Permission names granted to a profile role (empty for unknown roles)."""
    for entry in PERMISSION_MATRIX["roles"]:
        if entry["name"] == role:
            return entry["permissions"]
    return []
