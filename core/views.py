import logging
from urllib.parse import urlencode

from django.contrib import messages
from django.shortcuts import redirect, render
from django.urls import reverse

from .api_client import JobsApiClient
from .board import CATEGORY_FIELDS, DEFAULT_TAB, TABS, FilterState, JobBoard, SearchPayload
from .forms import JobForm
from .intake import JobDraft, JobIntake

logger = logging.getLogger(__name__)

SESSION_DRAFT_KEY = 'job_draft'


# --- 1. Job Board ---

def _board_url(state, **changes):
    params = {**state, **changes}
    params = {key: value for key, value in params.items() if value not in (None, '')}
    url = reverse('job_board')
    return f"{url}?{urlencode(params)}" if params else url


def _parse_job_id(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def job_board(request):
    """
    Job feed with filter dropdowns, tabs and a detail pane.
    The whole board state travels in the query string.
    """
    filters = FilterState.from_query(request.GET)
    tab = request.GET.get('tab')
    if tab not in TABS:
        tab = DEFAULT_TAB
    search = SearchPayload(
        search_term=request.GET.get('q', '').strip(),
        location=request.GET.get('loc', '').strip(),
    )
    open_category = request.GET.get('open')
    if open_category not in CATEGORY_FIELDS:
        open_category = None

    board = JobBoard(filters=filters, tab=tab)
    board.fetch(JobsApiClient(), search)

    job_id = _parse_job_id(request.GET.get('job'))
    if job_id is not None:
        board.select_job(job_id)

    base = {'q': search.search_term, 'loc': search.location}
    state = {
        **base,
        **filters.to_query(),
        'tab': '' if tab == DEFAULT_TAB else tab,
        'job': board.active_job.id if board.active_job else '',
    }

    tabs = [
        {'name': name, 'url': _board_url(state, tab='' if name == DEFAULT_TAB else name), 'active': name == tab}
        for name in TABS
    ]

    dropdowns = []
    for dropdown in board.dropdowns(open_category):
        options = []
        for option in dropdown.options:
            # Picking an option toggles it and drops the selected job and open menu
            toggled = filters.toggle(dropdown.category, option)
            options.append({
                'value': option,
                'selected': option == dropdown.selected,
                'url': _board_url({**base, **toggled.to_query(), 'tab': state['tab']}),
            })
        dropdowns.append({
            'dropdown': dropdown,
            'toggle_url': _board_url(state, open='' if dropdown.is_open else dropdown.category),
            'options': options,
        })

    logger.debug("Board: %d of %d jobs match %r", len(board.filtered_jobs), len(board.jobs), filters)

    cards = [
        {'job': job, 'url': _board_url(state, job=job.id), 'active': job is board.active_job}
        for job in board.filtered_jobs
    ]

    context = {
        'board': board,
        'search': search,
        'filters': filters,
        'tabs': tabs,
        'dropdowns': dropdowns,
        'cards': cards,
        'active_job': board.active_job,
    }

    # If this is an HTMX request (filter, tab or card click), render just the results
    if request.headers.get('HX-Request'):
        return render(request, 'core/partials/board_content.html', context)

    return render(request, 'core/job_board.html', context)


# --- 2. Job Intake ---

def _load_draft(request):
    data = request.session.get(SESSION_DRAFT_KEY)
    return JobDraft.from_dict(data) if data else JobDraft.blank()


def _save_draft(request, draft):
    request.session[SESSION_DRAFT_KEY] = draft.to_dict()


def add_job(request):
    """
    Job creation form. The draft is kept in the session so a failed
    submit can be retried without losing it.
    """
    intake = JobIntake(_load_draft(request))

    if request.method == 'POST':
        form = JobForm(request.POST)
        if form.is_valid():
            form.apply_to(intake)
            submitted = intake.submit(JobsApiClient())
            _save_draft(request, intake.draft)

            if submitted:
                messages.success(request, intake.message)
                return redirect('add_job')
            messages.error(request, intake.message)
    else:
        _save_draft(request, intake.draft)
        form = JobForm(initial=JobForm.initial_from_draft(intake.draft))

    return render(request, 'core/add_job.html', {'form': form, 'draft': intake.draft})
