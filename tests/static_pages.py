"""Static page with a scripted roving radio group, for live browser tests."""

STATIC_REF = "static/roving-radio.html"

STATIC_PAGE = """<!DOCTYPE html>
<html lang="en"><head><title>Roving radio</title></head><body>
<div id="ex1">
  <span id="size-label">Size</span>
  <div role="radiogroup" aria-labelledby="size-label">
    <div role="radio" tabindex="0" aria-checked="false">Small</div>
    <div role="radio" tabindex="-1" aria-checked="false">Medium</div>
    <div role="radio" tabindex="-1" aria-checked="false">Large</div>
  </div>
  <button id="after" type="button">After</button>
  <input id="text" type="text" value="hello" aria-describedby="">
</div>
<script>
  const radios = Array.from(document.querySelectorAll('[role="radio"]'));
  const steps = {ArrowRight: 1, ArrowDown: 1, ArrowLeft: -1, ArrowUp: -1};
  radios.forEach((radio, index) => {
    radio.addEventListener('keydown', (event) => {
      const step = steps[event.key];
      if (!step) {
        return;
      }
      const next = radios[(index + step + radios.length) % radios.length];
      radios.forEach((r) => {
        r.tabIndex = -1;
        r.setAttribute('aria-checked', 'false');
      });
      next.tabIndex = 0;
      next.setAttribute('aria-checked', 'true');
      next.focus();
      event.preventDefault();
    });
  });
</script>
</body></html>"""
