from hostel_laundry.services.schedule.date_schedule_service import DateScheduleService
from hostel_laundry.services.schedule.schedule_service import ScheduleService, normalize_schedule_times
from hostel_laundry.services.schedule.template_service import TemplateService

__all__ = ["ScheduleService", "DateScheduleService", "TemplateService", "normalize_schedule_times"]
