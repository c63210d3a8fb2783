from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from movebetter.auth.guard import RouteGuard
from movebetter.auth.models import Role, SessionUser
from movebetter.views import render_dashboard, render_patient_home, render_personal_data

router = APIRouter(tags=['console'])

admin_only = RouteGuard()
patient_only = RouteGuard([Role.PATIENT])
any_role = RouteGuard([Role.ADMIN, Role.PATIENT])


@router.get('/', response_class=HTMLResponse)
def dashboard(user: SessionUser = Depends(admin_only)):
    return render_dashboard(user)


@router.get('/paciente', response_class=HTMLResponse)
def patient_home(user: SessionUser = Depends(patient_only)):
    return render_patient_home(user)


@router.get('/perfil', response_class=HTMLResponse)
def personal_data(user: SessionUser = Depends(any_role)):
    return render_personal_data(user)
