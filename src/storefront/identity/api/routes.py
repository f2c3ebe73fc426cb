"""FastAPI endpoints for customer authentication."""

from fastapi import APIRouter, Depends, Request, Response
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.errors import InvalidRequest, NotAuthenticated
from storefront.identity.api.schemas import (
    CustomerProfile,
    CustomerResponse,
    LoginRequest,
    RegisteredCustomer,
    RegisterRequest,
    RegisterResponse,
    ResendVerificationRequest,
    VerifyEmailRequest,
)
from storefront.identity.authentication import issue_session, login, revoke_session
from storefront.identity.customer.customer import Customer
from storefront.identity.customer.registration import RegisterCustomer
from storefront.identity.customer.verification import ResendVerificationCode, VerifyEmail
from storefront.web.envelope import MessageResponse
from storefront.web.session import (
    SESSION_COOKIE,
    clear_session_cookie,
    client_ip,
    current_customer_id,
    set_session_cookie,
    user_agent,
)

router = APIRouter(prefix="/auth", tags=["auth"])


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


@router.post("/register", status_code=201, response_model=RegisterResponse)
async def register(body: RegisterRequest) -> RegisterResponse:
    if any(_blank(value) for value in (body.first_name, body.last_name, body.email, body.password)):
        raise InvalidRequest("All required fields must be provided")

    command = RegisterCustomer(
        email=body.email,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
        phone=body.phone,
        agree_to_terms=body.agree_to_terms,
    )
    email = current_domain.process(command, asynchronous=False)
    return RegisterResponse(
        message="Registration successful. Please check your email for the verification code.",
        customer=RegisteredCustomer(email=email),
    )


@router.post("/verify-email", response_model=CustomerResponse)
async def verify_email(body: VerifyEmailRequest, request: Request, response: Response) -> CustomerResponse:
    if _blank(body.email) or _blank(body.code):
        raise InvalidRequest("Email and verification code are required")

    customer_id = current_domain.process(VerifyEmail(email=body.email, code=body.code), asynchronous=False)
    customer = current_domain.repository_for(Customer).get(customer_id)

    session = issue_session(customer_id, ip_address=client_ip(request), user_agent=user_agent(request))
    set_session_cookie(response, session)
    return CustomerResponse(message="Email verified successfully", customer=CustomerProfile.from_customer(customer))


@router.post("/resend-verification", response_model=MessageResponse)
async def resend_verification(body: ResendVerificationRequest) -> MessageResponse:
    if _blank(body.email):
        raise InvalidRequest("Email is required")

    current_domain.process(ResendVerificationCode(email=body.email), asynchronous=False)
    return MessageResponse(message="Verification code sent")


@router.post("/login", response_model=CustomerResponse)
async def login_customer(body: LoginRequest, request: Request, response: Response) -> CustomerResponse:
    if _blank(body.email) or not body.password:
        raise InvalidRequest("Email and password are required")

    customer, session = login(
        body.email,
        body.password,
        ip_address=client_ip(request),
        user_agent=user_agent(request),
    )
    set_session_cookie(response, session)
    return CustomerResponse(message="Login successful", customer=CustomerProfile.from_customer(customer))


@router.post("/logout", response_model=MessageResponse)
async def logout(request: Request, response: Response) -> MessageResponse:
    revoke_session(request.cookies.get(SESSION_COOKIE))
    clear_session_cookie(response)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=CustomerResponse)
async def me(customer_id: str = Depends(current_customer_id)) -> CustomerResponse:
    try:
        customer = current_domain.repository_for(Customer).get(customer_id)
    except ObjectNotFoundError:
        raise NotAuthenticated() from None
    if not customer.is_active:
        raise NotAuthenticated()
    return CustomerResponse(customer=CustomerProfile.from_customer(customer))
