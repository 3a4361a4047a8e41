from mentorconnect.email_templates import booking_accepted_template, password_reset_template


def test_booking_accepted_escapes_names():
    mjml = booking_accepted_template(
        mentee_name='<a href="https://evil.example">claim prize</a>',
        mentor_name="Ada <b>Lovelace</b>",
        calendar_link="https://cal.com/ada",
    )
    assert "<a href" not in mjml
    assert "<b>Lovelace</b>" not in mjml
    assert "&lt;a href=&quot;https://evil.example&quot;&gt;claim prize&lt;/a&gt;" in mjml
    assert "Ada &lt;b&gt;Lovelace&lt;/b&gt;" in mjml


def test_booking_accepted_without_calendar_link():
    mjml = booking_accepted_template("Max", "Ada", calendar_link=None)
    assert "Ada will share a scheduling link with you shortly." in mjml
    assert "Schedule your session" not in mjml


def test_booking_accepted_keeps_stored_goal_as_is():
    # Goals are escaped when the booking is written
    mjml = booking_accepted_template("Max", "Ada", "https://cal.com/ada", goal="Ship v1 &amp; hire")
    assert "Ship v1 &amp; hire" in mjml
    assert "&amp;amp;" not in mjml


def test_password_reset_contains_link():
    assert "https://app.example/reset?token=abc" in password_reset_template(
        "https://app.example/reset?token=abc"
    )
