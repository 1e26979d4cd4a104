"""Domain limits shared by schemas and services."""

# Names and credentials
NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 100
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 100
PHONE_MAX_LENGTH = 30

# Tutor profile
BIO_MAX_LENGTH = 2000
QUALIFICATIONS_MAX_LENGTH = 1000
SUBJECTS_MAX_COUNT = 20
HOURLY_RATE_MIN = 5
HOURLY_RATE_MAX = 10000
EXPERIENCE_MIN = 0
EXPERIENCE_MAX = 100

# Bookings
BOOKING_SUBJECT_MAX_LENGTH = 100
BOOKING_NOTES_MAX_LENGTH = 500
BOOKING_DURATION_MIN = 1  # minutes
BOOKING_DURATION_MAX = 480  # 8 hours
BOOKING_PRICE_MAX = 10000
PAYMENT_METHOD_MAX_LENGTH = 50

# Reviews
REVIEW_RATING_MIN = 1
REVIEW_RATING_MAX = 5
REVIEW_COMMENT_MAX_LENGTH = 1000

# Categories
CATEGORY_NAME_MAX_LENGTH = 50
CATEGORY_DESCRIPTION_MAX_LENGTH = 500

# Availability (0 = Sunday)
DAY_OF_WEEK_MIN = 0
DAY_OF_WEEK_MAX = 6
TIME_PATTERN = r"^([01][0-9]|2[0-3]):[0-5][0-9]$"
MIN_SLOT_MINUTES = 30

# Pagination
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 50
