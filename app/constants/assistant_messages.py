"""User-visible fixed content of the assistant (Arabic, as shown in the app)."""

FALLBACK_ANSWER = (
    "عذراً، لم أتمكن من فهم سؤالك بشكل كامل. "
    "هل يمكنك إعادة صياغته أو اختيار أحد المواضيع التالية؟"
)

BROWSE_FAQS_LABEL = "تصفح الأسئلة الشائعة"
CONTACT_SUPPORT_LABEL = "تحدث مع فريق الدعم"
START_INVESTMENT_LABEL = "ابدأ الاستثمار الآن"
EXPLORE_OPPORTUNITIES_LABEL = "استكشف الفرص المتاحة"

AGRICULTURAL_PAGE_URL = "/agricultural"
SUPPORT_PAGE_URL = "/support"

# Shown when the approved corpus is empty; order matters.
STATIC_SUGGESTED_QUESTIONS = (
    "ما فكرة المنصة؟",
    "هل املك الشجرة فعليا؟",
    "كيف استفيد من المحصول؟",
)
