from weatherchain.settings import Settings, Size


def _write(tmp_path, text):
    path = tmp_path / "settings.ini"
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults_without_file():
    settings = Settings()
    assert settings.app_name == "DefaultApp"
    assert settings.version == "v1.0.0"
    assert settings.copyright == "DefaultCopyright"
    assert settings.year == 2021
    assert settings.theme_name == "default_theme"
    assert settings.custom_title_bar is True


def test_default_sizes():
    settings = Settings()
    assert settings.startup_size == Size(1260, 720)
    assert settings.minimum_size == Size(960, 540)
    assert settings.left_menu_size == Size(50, 240)
    assert settings.left_column_size == Size(0, 240)
    assert settings.right_column_size == Size(0, 240)
    assert settings.left_menu_content_margins == 3


def test_default_font_and_animation():
    settings = Settings()
    assert settings.font_family == "Roboto"
    assert settings.font_title_size == 10
    assert settings.font_text_size == 9
    assert settings.time_animation == 500


def test_missing_file_gives_defaults(tmp_path):
    settings = Settings(tmp_path / "absent.ini")
    assert settings.app_name == "DefaultApp"
    assert settings.startup_size == Size(1260, 720)


def test_values_are_read_from_file(tmp_path):
    path = _write(
        tmp_path,
        "[Application]\napp_name = Weather Station\nyear = 2030\n"
        "[Window]\nstartup_width = 800\nstartup_height = 600\n"
        "[Font]\nfont_family = Mono\n",
    )
    settings = Settings(path)
    assert settings.app_name == "Weather Station"
    assert settings.year == 2030
    assert settings.startup_size == Size(800, 600)
    assert settings.font_family == "Mono"
    assert settings.minimum_size == Size(960, 540)


def test_quoted_value_is_unquoted(tmp_path):
    path = _write(tmp_path, '[Application]\nversion = "v2.0.0"\n')
    assert Settings(path).version == "v2.0.0"


def test_boolean_values(tmp_path):
    assert Settings(_write(tmp_path, "[Application]\ncustom_title_bar = false\n")).custom_title_bar is False
    assert Settings(_write(tmp_path, "[Application]\ncustom_title_bar = 0\n")).custom_title_bar is False
    assert Settings(_write(tmp_path, "[Application]\ncustom_title_bar = true\n")).custom_title_bar is True


def test_non_numeric_reads_as_zero(tmp_path):
    path = _write(tmp_path, "[Menu]\nleft_menu_content_margins = wide\n")
    assert Settings(path).left_menu_content_margins == 0


def test_keys_are_case_sensitive(tmp_path):
    path = _write(tmp_path, "[Application]\nAPP_NAME = Shouting\n")
    assert Settings(path).app_name == "DefaultApp"