import logging
import pygame
from phloem import reflow, Widget, Options

logger = logging.getLogger("demo")

def article():
    # the floating buttons sit next to the main column
    return [
        Widget("header", 0, 0, 300, 37.5),
        Widget("sidebar", 0, 40, 62.5, 200),
        Widget("main", 65, 40, 200, 100),
        Widget("related", 65, 150, 200, 40, hidden=True),
        Widget("comments", 65, 200, 200, 75),
        Widget("footer", 0, 240, 300, 37.5),
        Widget("fb", 270, 45, 25, 25),
        Widget("ig", 270, 75, 25, 25),
    ]

def grid():
    widgets = []
    for row, (dx, dy) in enumerate([(0, 0), (10, 80)]):
        for col in range(5):
            stagger = 50 if col % 2 else 0
            widgets.append(Widget(f"{'ab'[row]}{col}",
                dx + 50*col, dy + stagger, 100, 100))
    return widgets

presets = [article(), grid()]

SCREEN_WIDTH = 900
SCREEN_HEIGHT = 560
PANE_WIDTH = 420
MARGIN = 16
HEADER = 64

def draw_pane(screen, font, title, widgets, left, show_invisible):
    pane = pygame.Rect(left, MARGIN, PANE_WIDTH, SCREEN_HEIGHT - 2*MARGIN)
    pygame.draw.rect(screen, (90,90,90), pane, 1)
    screen.blit(font.render(title, True, (220,220,220)), (left + 8, MARGIN + 8))
    for w in widgets:
        if w.hidden and not show_invisible:
            continue
        rect = widget_rect(w, left)
        color = (110,110,110) if w.hidden else (200,200,200)
        pygame.draw.rect(screen, color, rect, 1)
        label = f"{w.id} (gone)" if w.hidden else w.id
        text = font.render(label, True, color)
        screen.blit(text, text.get_rect(center=rect.center))

def widget_rect(w, left):
    return pygame.Rect(left + 8 + w.x, MARGIN + HEADER + w.y, max(w.width, 1), max(w.height, 1))

def toggle_at(widgets, pos):
    for w in reversed(widgets):
        if widget_rect(w, MARGIN).collidepoint(pos):
            w.hidden = not w.hidden
            logger.info("%s is now %s", w.id, "hidden" if w.hidden else "visible")
            return True
    return False

logging.basicConfig(level=logging.INFO)

pygame.init()
screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
pygame.display.set_caption("phloem")
font = pygame.font.SysFont(None, 18)
clock = pygame.time.Clock()

current = 0
options = Options()
show_invisible = True
before = presets[current]
after = reflow(before, options)

while True:
    changed = False
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            pygame.quit()
            raise SystemExit
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            changed |= toggle_at(before, event.pos)
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_TAB:
                current = (current + 1) % len(presets)
                before = presets[current]
            elif event.key == pygame.K_c:
                options = options.replace(collapse_spacing=not options.collapse_spacing)
            elif event.key == pygame.K_n:
                options = options.replace(
                    measure_only_nearest_above=not options.measure_only_nearest_above)
            elif event.key == pygame.K_g:
                options = options.replace(
                    backend="glop" if options.backend == "simplex" else "simplex")
            elif event.key == pygame.K_i:
                show_invisible = not show_invisible
            else:
                continue
            changed = True
            logger.info("preset %d, %s", current, options)
    if changed:
        after = reflow(before, options)

    screen.fill((30,30,30))
    draw_pane(screen, font, "Before", before, MARGIN, show_invisible)
    draw_pane(screen, font, "After", after, 2*MARGIN + PANE_WIDTH, False)

    pygame.display.flip()
    clock.tick(60)
