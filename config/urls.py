"""
URL configuration for Django Ninja API.
All endpoints under /api/v1/ prefix.
"""

from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.http import JsonResponse
from django.urls import path
from ninja import NinjaAPI

from accounts.admin_api import router as admin_data_router
from accounts.auth_api import auth_router
from common.exceptions import install_exception_handlers
from project.api import router as project_router
from project.api import team_router
from task.api import router as task_router

# Create Ninja API
api = NinjaAPI(
    title=f'{settings.APP_NAME} API',
    version=settings.APP_VERSION,
    description='REST API for project, team and task management',
)

install_exception_handlers(api)

# Include routers with prefixes
api.add_router('/auth', auth_router, tags=['authentication'])
api.add_router('/admin-data', admin_data_router, tags=['admin'])
api.add_router('/projects', project_router, tags=['projects'])
api.add_router('/teams', team_router, tags=['teams'])
api.add_router('/tasks', task_router, tags=['tasks'])


# Health check endpoint
@api.get('/health')
def health_check(request):
    """Health check endpoint"""
    return {'status': 'ok', 'version': settings.APP_VERSION}


# URL patterns
urlpatterns = [
    # Admin interface
    path('admin/', admin.site.urls),

    # API endpoints
    path('api/v1/', api.urls),

    # Root endpoint with API info
    path('', lambda request: JsonResponse({
        'app': settings.APP_NAME,
        'version': settings.APP_VERSION,
        'docs': '/api/v1/docs',
    })),
]

urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
