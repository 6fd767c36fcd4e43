"""
Pydantic schemas for request/response validation.
"""
from .common import HealthResponse, MessageResponse
from .user import (
    UserCreate, UserLogin, UserSummary, UserResponse, AuthResponse, ProfileSetup, ProfileSetupResponse,
)
from .wardrobe import WardrobeItem, WardrobeItemCreated, WardrobeList
from .outfit import OutfitGenerateRequest, OccasionOutfitRequest, UserStyleType, Occasion
from .daily import (
    CalendarEventIn, DailyOutfitRequest, MarkWornRequest, WeeklyPlanRequest, ConfirmOutfitRequest, Mood,
)
from .style_history import Photo, TrackWornRequest, ResolveGapRequest
from .payment import CreateOrderRequest, VerifyPaymentRequest, PaymentCallbackRequest, ExchangeCodeRequest
