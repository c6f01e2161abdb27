import json

from roughchart.charts.document import build_chart_config, build_document, font_stylesheet_url
from roughchart.charts.models import ChartRequest, RoughOptions
from roughchart.settings import ChartSettings

SETTINGS = ChartSettings(_env_file=None)


def _request(**kwargs) -> ChartRequest:
    kwargs.setdefault("type", "bar")
    kwargs.setdefault(
        "data",
        {"labels": ["Red", "Blue"], "datasets": [{"label": "# of Votes", "data": [12, 19]}]},
    )
    return ChartRequest(**kwargs)


def test_without_fonts_there_is_no_stylesheet_and_ready_runs_immediately() -> None:
    html = build_document(_request(), SETTINGS)

    assert "fonts.googleapis.com" not in html
    assert "new FontFaceObserver" not in html
    assert "defaultFontFamily" not in html
    assert "  ready();" in html


def test_fonts_are_linked_and_awaited() -> None:
    html = build_document(_request(font_family="Roboto Slab, Lato"), SETTINGS)

    assert '<link rel="stylesheet" href="https://fonts.googleapis.com/css?family=Roboto+Slab|Lato">' in html
    assert 'new FontFaceObserver("Roboto Slab")' in html
    assert 'new FontFaceObserver("Lato")' in html
    assert ".then(ready);" in html
    assert "  ready();" not in html
    assert 'Chart.defaults.global.defaultFontFamily = "Roboto Slab, Lato";' in html


def test_font_list_is_trimmed_and_blank_entries_dropped() -> None:
    request = _request(font_family=" Indie Flower ,, Caveat ")

    assert request.fonts == ["Indie Flower", "Caveat"]
    assert font_stylesheet_url(request.fonts, SETTINGS).endswith("?family=Indie+Flower|Caveat")
    assert font_stylesheet_url([], SETTINGS) is None


def test_rough_style_registers_plugin() -> None:
    html = build_document(_request(style="rough"), SETTINGS)

    assert "Chart.plugins.register(ChartRough);" in html
    assert "plugins.push(ChartRough);" in html


def test_normal_style_does_not_register_plugin() -> None:
    html = build_document(_request(style="normal"), SETTINGS)

    assert "Chart.plugins.register(ChartRough)" not in html
    assert "plugins.push(ChartRough)" not in html


def test_document_embeds_libraries_canvas_and_font_defaults() -> None:
    html = build_document(
        _request(width=800, height=600, font_size=14, font_color="#123456", font_style="bold"),
        SETTINGS,
    )

    for url in (
        SETTINGS.fontfaceobserver_url,
        SETTINGS.chartjs_url,
        SETTINGS.roughjs_url,
        SETTINGS.chartjs_rough_url,
    ):
        assert f'<script src="{url}"></script>' in html
    assert '<canvas id="main" width="800" height="600"></canvas>' in html
    assert "background: transparent;" in html
    assert "Chart.defaults.global.defaultFontSize = 14.0;" in html
    assert 'Chart.defaults.global.defaultFontColor = "#123456";' in html
    assert 'Chart.defaults.global.defaultFontStyle = "bold";' in html
    assert "div.className = 'ready';" in html


def test_chart_config_disables_animation_and_attaches_rough_options() -> None:
    request = _request(
        options={
            "scales": {"yAxes": [{"ticks": {"beginAtZero": True}}]},
            "animation": {"duration": 1000},
            "plugins": {"legend": {"display": False}},
        },
        rough=RoughOptions(roughness=2, fill_style="zigzag"),
    )

    config = build_chart_config(request)

    assert config["type"] == "bar"
    assert config["data"] == request.data
    options = config["options"]
    assert options["scales"] == {"yAxes": [{"ticks": {"beginAtZero": True}}]}
    assert options["animation"] == {"duration": 0}
    assert options["hover"] == {"animationDuration": 0}
    assert options["responsiveAnimationDuration"] == 0
    assert options["plugins"]["legend"] == {"display": False}
    assert options["plugins"]["rough"] == {
        "roughness": 2,
        "bowing": 1,
        "fillStyle": "zigzag",
        "fillWeight": 0.5,
        "hachureAngle": -41,
        "hachureGap": 4,
        "curveStepCount": 9,
        "simplification": 9,
    }
    # caller's options are not mutated
    assert request.options["animation"] == {"duration": 1000}


def test_chart_config_is_embedded_as_json() -> None:
    request = _request(options={"title": {"display": True, "text": "Votes"}})
    html = build_document(request, SETTINGS)

    line = next(l for l in html.splitlines() if "var chartConfig = " in l)
    payload = line.split("var chartConfig = ", 1)[1].rstrip(";")
    assert json.loads(payload) == build_chart_config(request)


def test_script_breaking_data_is_escaped() -> None:
    html = build_document(_request(data={"labels": ["</script><b>x</b>"], "datasets": []}), SETTINGS)

    assert "</script><b>" not in html
    assert "\\u003c/script\\u003e" in html


def test_empty_datasets_still_build_a_document() -> None:
    html = build_document(_request(data={"datasets": []}, style="normal"), SETTINGS)

    assert '"datasets": []' in html
    assert "window.chart = new Chart(ctx" in html
