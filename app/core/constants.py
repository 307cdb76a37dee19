# app/core/constants.py

import re

# ==========================================================
# COMMITTEES (fixed set of four)
# ==========================================================
COMMITTEES = [
    "Public Relations (PR) - العلاقات العامة",
    "Human Resources (HR) - الموارد البشرية",
    "Operations (OR) - العمليات",
    "Social Media (SM) - وسائل التواصل الاجتماعي",
]

# ==========================================================
# GOVERNORATES
# ==========================================================
GOVERNORATES = [
    "القاهرة", "الجيزة", "الإسكندرية", "البحيرة", "كفر الشيخ", "الدقهلية",
    "الغربية", "المنوفية", "القليوبية", "الشرقية", "بورسعيد", "الإسماعيلية",
    "السويس", "شمال سيناء", "جنوب سيناء", "البحر الأحمر", "الفيوم",
    "بني سويف", "المنيا", "أسيوط", "سوهاج", "قنا", "الأقصر", "أسوان",
    "الوادي الجديد", "مطروح",
]

# ==========================================================
# FIELD PATTERNS
# ==========================================================
MOBILE_PATTERN = re.compile(r"^01[0125][0-9]{8}$")
EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")

# Name of the field the reCAPTCHA widget posts its token in
RECAPTCHA_FIELD = "g-recaptcha-response"
DEV_BYPASS_TOKEN = "development-token-bypass"

# Persistence collection / table
SUBMISSIONS_COLLECTION = "submissions"

# ==========================================================
# USER-FACING MESSAGES (Arabic)
# ==========================================================
MSG_CHECKING_DATA = "جاري التحقق من البيانات..."
MSG_CHECKING_RECAPTCHA = "جاري التحقق من reCAPTCHA..."
MSG_SENDING = "جاري إرسال البيانات..."
MSG_SUCCESS = "تم التسجيل بنجاح"

MSG_TERMS_REQUIRED = "يجب الموافقة على الشروط والأحكام للمتابعة"
MSG_RECAPTCHA_MISSING = "يرجى تأكيد أنك لست روبوتاً عبر reCAPTCHA"
MSG_RECAPTCHA_FAILED = "فشل التحقق من reCAPTCHA. برجاء المحاولة مرة أخرى"
MSG_INVALID_MOBILE = "رقم الموبايل غير صحيح"
MSG_INVALID_EMAIL = "البريد الإلكتروني غير صحيح"
MSG_REQUIRED_FIELD = "يرجى استكمال جميع الحقول المطلوبة"
MSG_INVALID_GOVERNORATE = "يرجى اختيار المحافظة من القائمة"
MSG_INVALID_COMMITTEE = "يرجى اختيار اللجنة من القائمة"
MSG_HISTORY_REQUIRED = "يرجى ذكر تفاصيل الأنشطة التطوعية السابقة"
MSG_GENERIC_FAILURE = "حدث خطأ أثناء إرسال البيانات. يرجى المحاولة مرة أخرى."

# Relay error bodies
RELAY_TOKEN_REQUIRED = "Token is required"
RELAY_INTERNAL_ERROR = "Internal server error"
