import logging

from django.contrib import messages
from django.contrib.auth import logout, get_user_model, update_session_auth_hash
from django.contrib.auth.decorators import login_required, user_passes_test
from django.contrib.auth.forms import PasswordResetForm
from django.contrib.auth.tokens import default_token_generator
from django.contrib.auth.views import LoginView
from django.conf import settings
from django.db import models
from django.shortcuts import get_object_or_404, render, redirect
from django.template.loader import render_to_string
from django.urls import reverse
from django.utils.encoding import force_bytes, force_str
from django.utils.http import urlsafe_base64_decode, urlsafe_base64_encode
from django.views.decorators.http import require_POST

from PORTAL.mail import mailjet_configured, send_mailjet_email
from .documents import DocumentError, ensure_required_documents, review_document, upload_document
from .forms import EmailUserCreationForm
from .models import Document

logger = logging.getLogger(__name__)


def admin_required(view_func):
    return user_passes_test(
        lambda u: u.is_authenticated and getattr(u, 'role', None) == 'ADMIN',
        login_url='login'
    )(view_func)


def client_required(view_func):
    return user_passes_test(
        lambda u: u.is_authenticated and getattr(u, 'role', None) == 'CLIENT',
        login_url='login'
    )(view_func)


def _send(subject, template, context, user):
    if not mailjet_configured():
        logger.info("Mailjet keys not set; skipping '%s' for user %s", subject, user.pk)
        return
    html_content = render_to_string(template, context)
    try:
        result = send_mailjet_email(
            subject=subject,
            html_content=html_content,
            to_email=user.email,
            to_name=user.get_full_name() or user.username,
        )
        logger.info("Mailjet response for '%s': %s", subject, result.status_code)
    except Exception:
        logger.exception("Mailjet send failed for '%s' to user %s", subject, user.pk)


class CustomLoginView(LoginView):
    template_name = 'registration/login.html'

    def form_invalid(self, form):
        username = self.request.POST.get('username')
        User = get_user_model()
        user = User.objects.filter(
            models.Q(email__iexact=username) | models.Q(username__iexact=username)
        ).first()

        if user and not user.is_active:
            form.is_unverified = True
            form._errors = {}
            return self.render_to_response(self.get_context_data(form=form))

        return super().form_invalid(form)


def register_view(request):
    form = EmailUserCreationForm(request.POST or None)
    if form.is_valid():
        user = form.save(commit=False)
        user.is_active = False
        user.role = "CLIENT"
        user.save()
        ensure_required_documents(user)

        uid = urlsafe_base64_encode(force_bytes(user.pk))
        token = default_token_generator.make_token(user)
        activation_link = request.build_absolute_uri(
            reverse('activate_account', args=[uid, token])
        )
        _send(
            "Activa tu cuenta en Santo Tomás Nuevo",
            'emails/activation_email.html',
            {'user_name': user.get_full_name() or user.username, 'activation_link': activation_link},
            user,
        )

        return render(
            request,
            "users/registration_pending.html",
            {
                "email": user.email,
                "activation_link": activation_link,
                "debug": settings.DEBUG,
            },
        )
    return render(request, "users/register.html", {"form": form})


def activate_account(request, uidb64, token):
    User = get_user_model()
    try:
        uid = force_str(urlsafe_base64_decode(uidb64))
        user = User.objects.get(pk=uid)
    except (TypeError, ValueError, OverflowError, User.DoesNotExist):
        user = None

    if user is not None and default_token_generator.check_token(user, token):
        user.is_active = True
        user.save()
        messages.add_message(
            request, messages.SUCCESS,
            "Tu cuenta ha sido activada correctamente. Ahora puedes iniciar sesión.",
            extra_tags='activated'
        )
        return redirect("login")

    messages.error(request, "El enlace de activación no es válido o ha expirado.")
    return redirect("login")


def custom_password_reset(request):
    if request.method == 'POST':
        form = PasswordResetForm(request.POST)
        if form.is_valid():
            email = form.cleaned_data['email']
            User = get_user_model()
            for user in User.objects.filter(email__iexact=email, is_active=True):
                uid = urlsafe_base64_encode(force_bytes(user.pk))
                token = default_token_generator.make_token(user)
                reset_link = request.build_absolute_uri(
                    reverse('password_reset_confirm', args=[uid, token])
                )
                _send(
                    'Restablece tu contraseña - Santo Tomás Nuevo',
                    'registration/password_reset_email.html',
                    {'user': user, 'reset_link': reset_link},
                    user,
                )
            return redirect('password_reset_done')
    else:
        form = PasswordResetForm()

    return render(request, 'registration/password_reset_form.html', {'form': form})


@admin_required
def admin_user_list(request):
    User = get_user_model()

    if request.method == "POST":
        target = get_object_or_404(User, pk=request.POST.get("user"))
        role = request.POST.get("role")
        if role not in dict(User.ROLE_CHOICES):
            messages.error(request, "Rol inválido.")
        elif target == request.user and role != "ADMIN":
            messages.error(request, "No puedes quitarte el rol de administrador.")
        else:
            target.role = role
            target.save(update_fields=["role"])
            logger.info("Admin %s set role of user %s to %s", request.user.pk, target.pk, role)
            messages.success(request, f"Rol de {target.email or target.username} actualizado.")
        return redirect("admin_user_list")

    users = User.objects.all().order_by("date_joined")
    return render(request, "users/admin_user_list.html", {"users": users, "roles": User.ROLE_CHOICES})


@login_required
def profile_view(request):
    user = request.user

    if request.method == "POST":
        email = request.POST.get("email") or ""
        first_name = request.POST.get("first_name") or ""
        last_name = request.POST.get("last_name") or ""
        phone = request.POST.get("phone") or ""
        current_password = request.POST.get("current_password") or ""
        new_password = request.POST.get("new_password") or ""
        confirm_password = request.POST.get("confirm_password") or ""
        form = {"email": email or user.email, "first_name": first_name, "last_name": last_name, "phone": phone}

        if new_password or confirm_password:
            if not current_password or not user.check_password(current_password):
                messages.error(request, "La contraseña actual no es correcta.")
                return render(request, "users/profile.html", {"form": form})
            if new_password != confirm_password:
                messages.error(request, "Las contraseñas nuevas no coinciden.")
                return render(request, "users/profile.html", {"form": form})
            user.set_password(new_password)

        if email:
            user.email = email
        user.first_name = first_name
        user.last_name = last_name
        user.phone = phone
        user.save()
        if new_password:
            update_session_auth_hash(request, user)
        messages.success(request, "Perfil actualizado correctamente.")
        return redirect("profile")

    context = {
        "form": {
            "email": user.email,
            "first_name": user.first_name,
            "last_name": user.last_name,
            "phone": user.phone,
        }
    }
    return render(request, "users/profile.html", context)


def logout_view(request):
    logout(request)
    messages.success(request, "Has cerrado sesión correctamente.")
    return redirect("lot_map")


@login_required
def my_documents(request):
    if request.method == "POST":
        try:
            document = upload_document(request.user, request.POST.get("doc_type"), request.FILES.get("file"))
        except DocumentError as e:
            messages.error(request, str(e))
        else:
            messages.success(request, f"{document.get_doc_type_display()} enviado a revisión.")
        return redirect("my_documents")

    documents = ensure_required_documents(request.user)
    return render(request, "users/documents.html", {
        "documents": documents,
        "max_mb": settings.DOCUMENT_MAX_BYTES // (1024 * 1024),
        "extensions": settings.DOCUMENT_EXTENSIONS,
    })


@admin_required
def admin_document_list(request):
    documents = Document.objects.select_related("user").exclude(status=Document.STATUS_REQUIRED)
    status = request.GET.get("status")
    if status:
        documents = documents.filter(status=status.upper())
    return render(request, "users/admin_document_list.html", {"documents": documents, "status": status})


@admin_required
@require_POST
def admin_document_review(request, document_id):
    document = get_object_or_404(Document.objects.select_related("user"), pk=document_id)
    approve = request.POST.get("decision") == "approve"
    try:
        review_document(document, approve, request.user, request.POST.get("notes", ""))
    except DocumentError as e:
        messages.error(request, str(e))
    else:
        messages.success(request, f"Documento {document.get_status_display().lower()}.")
    return redirect("admin_document_list")
