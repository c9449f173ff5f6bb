"""User-facing response messages.

Anti-enumeration paths return the same constant whether or not the target
account exists, so these strings must not be varied per outcome.
"""

# Success
REGISTRATION_EMAIL_SENT = "You will receive a registration email shortly!"
SUCCESSFUL_VERIFICATION = "If your account exists, it has been successfully verified."
RESET_PASSWORD_EMAIL_SENT = "You will receive an email with a password reset link shortly!"
FORGOT_PASSWORD_EMAIL_SENT = (
    "If you are registered, you will receive an email with a password reset link shortly!"
)
PASSWORD_RESET = "If you are registered, your password has been reset successfully."
ACCOUNT_DELETED = "Account deleted."
SESSION_ENDED = "User session ended!"
LOGIN_SUCCESSFUL = "Successfully logged in. Welcome {firstname} {lastname}!"
PROJECT_CREATED = "Project created!"
PROJECT_FOUND = "Project found!"
PROJECTS_FOUND = "{count} project(s) found!"
PROJECT_UPDATED = "Project updated!"
PROJECT_DELETED = "Project deleted!"
MEMBER_ASSIGNED = "Member role assigned!"
USER_FOUND = "User found!"
USERS_FOUND = "{count} user(s) found!"

# 400
MISSING_PROPERTIES = "Bad request! Missing properties: {fields}"
PASSWORD_MISMATCH = "Passwords don't match!"
INVALID_USER_ID = "Invalid user id!"
INVALID_PROJECT_ID = "Invalid project id!"
BAD_TOKEN = (
    "The password reset link is invalid or has expired. "
    "Please request a new password reset link."
)
BAD_VERIFICATION_TOKEN = "The verification link is invalid or has expired."
OWNER_ROLE_NOT_ASSIGNABLE = "The owner role cannot be assigned or changed."
INVALID_REQUEST = "Bad request! Invalid request body."

# 401
INVALID_CREDENTIALS = "Invalid credentials."
EMAIL_NOT_VERIFIED = "Email address not verified."
NOT_AUTHENTICATED = "Not authenticated."

# 403
PROJECT_FORBIDDEN = "Project not found or you lack permissions."
INCORRECT_ROLE = "You do not have the required role to perform this action."

# 404
USER_NOT_FOUND = "User not found!"
PROJECT_NOT_FOUND = "Project not found!"

# 409
EMAIL_ALREADY_REGISTERED = "Email already registered!"

# 5xx
INTERNAL_ERROR = "An unexpected error occurred. Please try again later."
SERVICE_UNAVAILABLE = "The service is currently unavailable. Please try again later."
